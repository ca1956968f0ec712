"""
Store configuration model and validation.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any, Optional
import logging
import os


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class StoreConfiguration:
    """Display and logging configuration for the shop."""
    
    # Currency display (nl-BE style by default: "€ 1.234,50")
    currency_symbol: str = "€"
    decimal_separator: str = ","
    thousands_separator: str = "."
    symbol_first: bool = True
    symbol_spacing: bool = True
    
    # Order display
    date_format: str = "%d-%m-%Y %H:%M"
    
    # Logging configuration
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_currency()
        self._validate_logging()
    
    def _validate_currency(self) -> None:
        if not self.currency_symbol or not isinstance(self.currency_symbol, str):
            raise ValueError("currency_symbol must be a non-empty string")
        
        if not self.decimal_separator:
            raise ValueError("decimal_separator must be a non-empty string")
        
        if self.decimal_separator == self.thousands_separator:
            raise ValueError("decimal_separator and thousands_separator must differ")
    
    def _validate_logging(self) -> None:
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(_LOG_LEVELS)}")
    
    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level.upper())
    
    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StoreConfiguration':
        """Create configuration from dictionary with environment variable support."""
        config_dict = dict(config_dict)
        
        env_overrides = {
            'log_level': os.getenv('BOOKSHOP_LOG_LEVEL'),
            'currency_symbol': os.getenv('BOOKSHOP_CURRENCY_SYMBOL'),
            'log_dir': os.getenv('BOOKSHOP_LOG_DIR'),
        }
        
        for key, env_value in env_overrides.items():
            if env_value is not None:
                config_dict[key] = env_value
        
        known = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        
        return cls(**config_dict)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
