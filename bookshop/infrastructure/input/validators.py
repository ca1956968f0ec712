"""
Parsing of raw console input into validated values.

Each ``parse_*`` function either returns a clean value or raises
``ValidationError``; ``Prompter`` turns that into a reject-and-re-prompt loop.
"""

from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, TypeVar

from bookshop.domain.exceptions import ValidationError
from bookshop.domain.interfaces.base import IErrorHandler
from bookshop.domain.models.catalog import Periodical, Publication, RecurrencePeriod
from bookshop.domain.services.pricing import MAX_PRICE, MIN_PRICE

T = TypeVar('T')


def parse_non_empty(raw: Optional[str], field: str = "value") -> str:
    if raw is None or not raw.strip():
        raise ValidationError("Input must not be empty.", field=field, value=raw)
    return raw.strip()


def parse_int(raw: Optional[str], field: str = "value") -> int:
    try:
        return int((raw or "").strip())
    except ValueError:
        raise ValidationError("Enter a whole number.", field=field, value=raw)


def parse_int_in_range(raw: Optional[str], minimum: int, maximum: int, field: str = "value") -> int:
    value = parse_int(raw, field)
    if value < minimum or value > maximum:
        raise ValidationError(f"Value must be between {minimum} and {maximum}.", field=field, value=value)
    return value


def parse_int_min(raw: Optional[str], minimum: int, field: str = "value") -> int:
    value = parse_int(raw, field)
    if value < minimum:
        raise ValidationError(f"Value must be >= {minimum}.", field=field, value=value)
    return value


def parse_decimal_in_range(raw: Optional[str], minimum: Decimal, maximum: Decimal,
                           field: str = "value") -> Decimal:
    """Parse a decimal number; both ``39.95`` and ``39,95`` are accepted."""
    text = (raw or "").strip().replace(",", ".")
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValidationError("Enter a valid decimal number.", field=field, value=raw)
    
    if not value.is_finite():
        raise ValidationError("Enter a valid decimal number.", field=field, value=raw)
    
    if value < minimum or value > maximum:
        raise ValidationError(f"Value must be between {minimum} and {maximum}.", field=field, value=value)
    return value


class Prompter:
    """Asks for input until the answer parses."""
    
    def __init__(self, error_handler: IErrorHandler,
                 input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        self.error_handler = error_handler
        self.input_func = input_func
        self.output_func = output_func
    
    def ask(self, prompt: str, parser: Callable[[str], T]) -> T:
        while True:
            raw = self.input_func(prompt)
            try:
                return parser(raw)
            except ValidationError as e:
                self.output_func(self.error_handler.handle_error(e, {'prompt': prompt}))
    
    def read_non_empty(self, prompt: str, field: str = "value") -> str:
        return self.ask(prompt, lambda raw: parse_non_empty(raw, field))
    
    def read_int_in_range(self, prompt: str, minimum: int, maximum: int, field: str = "value") -> int:
        return self.ask(prompt, lambda raw: parse_int_in_range(raw, minimum, maximum, field))
    
    def read_int_min(self, prompt: str, minimum: int, field: str = "value") -> int:
        return self.ask(prompt, lambda raw: parse_int_min(raw, minimum, field))
    
    def read_decimal_in_range(self, prompt: str, minimum: Decimal, maximum: Decimal,
                              field: str = "value") -> Decimal:
        return self.ask(prompt, lambda raw: parse_decimal_in_range(raw, minimum, maximum, field))
    
    def _read_publication_fields(self):
        identifier = self.read_non_empty("ISBN: ", "identifier")
        title = self.read_non_empty("Title: ", "title")
        publisher = self.read_non_empty("Publisher: ", "publisher")
        price = self.read_decimal_in_range(
            f"Price ({MIN_PRICE} - {MAX_PRICE}): ", MIN_PRICE, MAX_PRICE, "price"
        )
        return identifier, title, publisher, price
    
    def read_publication(self) -> Publication:
        """Read a book from the console."""
        return Publication(*self._read_publication_fields())
    
    def read_periodical(self) -> Periodical:
        """Read a periodical, including its recurrence period, from the console."""
        fields = self._read_publication_fields()
        
        self.output_func("Recurrence period:")
        for period in RecurrencePeriod:
            self.output_func(f"  {period.value}) {period.label}")
        choice = self.read_int_in_range("Choose (1-3): ", 1, 3, "recurrence")
        
        return Periodical(*fields, recurrence=RecurrencePeriod.from_menu_choice(choice))
