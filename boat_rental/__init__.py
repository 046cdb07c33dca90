"""Движок расчета цены аренды лодок и проверки промокодов"""

__version__ = "0.1.0"
