"""
Property-based тесты числовой корректности (Hypothesis).

Проверяют инварианты, которые должны выполняться для любых входов:
- Каноническая форма Rational
- Законы порядка и равенства
- Алгебраические тождества Complex
"""
