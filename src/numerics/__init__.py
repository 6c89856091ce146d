"""
Exact rational and complex numeric value types.

Immutable Rational (num/den над 64-bit integers) и Complex (real, imaginary
с ленивой полярной формой), плюс математические примитивы и JSON контракты.
Модуль не зависит от внешних систем и не выполняет I/O.
"""
