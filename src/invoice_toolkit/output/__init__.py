"""
Module: output

Purpose:
    Concrete drawing surfaces for the table engine.

Key Classes:
    - PdfCanvasSurface: ReportLab canvas backend
    - ImageSurface: Pillow raster backend

Dependencies:
    - reportlab: PDF generation
    - PIL: Raster page previews
"""

from .pdf_surface import PdfCanvasSurface
from .image_surface import ImageSurface

__all__ = [
    "PdfCanvasSurface",
    "ImageSurface",
]
