"""
Spooler Print Submission API

Stores uploaded 3D print files and extracts previews from STL and 3MF uploads.
"""

__version__ = "1.0.0"
