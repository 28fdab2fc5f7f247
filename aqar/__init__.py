"""
Aqar Listing Engine

Turns raw Egyptian real-estate text into structured listings and keeps
imported data clean:
1. Extracts purpose, area, price, broker and property type from chat text
2. Validates, formats and masks Egyptian mobile numbers
3. Detects data-quality defects in text, HTML fragments and records
4. Scores quality and auto-cleans what it can repair
"""

__version__ = "0.1.0"
