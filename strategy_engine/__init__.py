"""
strategy_engine — движок ценообразования и кодирования двусторонних
range-стратегий ликвидности.

Пакеты:
- core/                 : числовые примитивы, доменные модели, контракты
- strategy_management/  : построение, декодирование и создание стратегий
"""
