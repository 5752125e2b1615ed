"""
FastAPI dependency injection functions.
Provides common dependencies used across endpoints.
"""

from typing import Annotated

from fastapi import Depends

from spooler.config import Settings, get_settings
from spooler.services.print_inspector import PrintFileInspector, get_print_inspector
from spooler.storage import StorageFacade, get_storage


# Type aliases for cleaner endpoint signatures
Storage = Annotated[StorageFacade, Depends(get_storage)]
Inspector = Annotated[PrintFileInspector, Depends(get_print_inspector)]
AppSettings = Annotated[Settings, Depends(get_settings)]
