"""
petfolio - Personal site content store with an image ingestion pipeline

A small content backend for a single-owner personal site:
- Pets, gallery images, blog posts and page text stored as JSON documents
- Local key-value persistence with DuckDB
- Image downscaling, re-encoding and cropping with Pillow
- Owner capability gate on every mutation
"""

__version__ = "0.1.0"
__author__ = "petfolio"
__description__ = "Personal site content store with an image ingestion pipeline"
