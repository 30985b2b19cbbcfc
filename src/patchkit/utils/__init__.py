"""Utility modules for patchkit."""

from .console import (
    _rich_success,
    _rich_error,
    _rich_warning,
    _rich_info,
    _rich_echo,
    _rich_panel,
    _rich_diff,
    _rich_confirm,
    _get_console,
    configure_logging,
    STATUS_SYMBOLS
)

__all__ = [
    '_rich_success',
    '_rich_error',
    '_rich_warning',
    '_rich_info',
    '_rich_echo',
    '_rich_panel',
    '_rich_diff',
    '_rich_confirm',
    '_get_console',
    'configure_logging',
    'STATUS_SYMBOLS'
]
