"""
Business logic services for the Spooler API.
Services handle core operations separate from API endpoints.
"""

from spooler.services.print_inspector import PrintFileInspector, get_print_inspector

__all__ = [
    "PrintFileInspector",
    "get_print_inspector",
]
