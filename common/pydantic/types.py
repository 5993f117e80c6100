from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Гроші рахуємо в Decimal, а в JSON віддаємо числом, а не рядком
Money = Annotated[Decimal, PlainSerializer(lambda value: float(value), return_type=float, when_used="json")]

Percentage = Annotated[Decimal, PlainSerializer(lambda value: float(value), return_type=float, when_used="json")]
