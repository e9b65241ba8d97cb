"""
Invoice Manager Backend Application.

A FastAPI service storing PDF invoices in MongoDB/GridFS and extracting
their fields with AI providers (Gemini, Groq).
"""

__version__ = "1.0.0"
