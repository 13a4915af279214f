"""
yanlib: тотальные числовые конверсии, генерация случайных чисел в диапазоне,
проверка полей моделей на значения по умолчанию и очистка коллекций.

Модули не зависят от внешних систем и не хранят состояния между вызовами.
"""
