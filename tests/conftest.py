"""
Pytest Configuration and Shared Fixtures

Provides sample listings, chat exports, HTML fragments and records shared by
all test modules.
"""

import pytest
from typing import Dict, Any

from aqar.utils.config import get_settings


# ============================================================================
# Settings
# ============================================================================

@pytest.fixture
def reset_settings():
    """Clear the cached settings before and after a test that patches env vars."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Listing Text Fixtures
# ============================================================================

@pytest.fixture
def sale_listing() -> str:
    """Arabic apartment-for-sale message with price and mobile."""
    return "شقة للبيع في المعادي السعر 2500000 اتصل 01012345678"


@pytest.fixture
def wanted_listing() -> str:
    """Arabic wanted message without price or mobile."""
    return "فيلا مطلوبة في الشيخ زايد"


@pytest.fixture
def english_rent_listing() -> str:
    """English rental listing with a broker title."""
    return "Office for rent in New Cairo, 45,000 EGP monthly. Contact Eng. Ahmed Hassan +20 11 2345 6789"


@pytest.fixture
def chat_export() -> str:
    """Small WhatsApp export with a system line and a wrapped line."""
    return "\n".join([
        "[1/7/25, 10:30:25 AM] Ahmed Broker: شقة للبيع في مدينة نصر 1,850,000 جنيه 01112345678",
        "[1/7/25, 10:31] Sara: مطلوب فيلا في التجمع الخامس",
        "Messages and calls are end-to-end encrypted.",
        "",
        "[2/7/25, 09:05:00] Mohamed: Villa for sale in Sheikh Zayed 12,000,000 call 01212345678",
        "continued line without a header",
    ])


# ============================================================================
# Quality Fixtures
# ============================================================================

@pytest.fixture
def duplicate_field_record() -> Dict[str, Any]:
    """Record whose only defect is a duplicated field."""
    return {"title": "Villa", "title_duplicate": "Villa"}


@pytest.fixture
def complete_listing_record() -> Dict[str, Any]:
    """Record with every required and optional listing field."""
    return {
        "title": "Apartment in Maadi",
        "location": "المعادي",
        "price": 2500000,
        "property_type": "apartment",
        "description": "Three bedrooms, two bathrooms",
        "agent_name": "Eng. Ahmed",
        "mobile": "01012345678",
        "area_size": "180 sqm",
        "rooms": 3,
    }


@pytest.fixture
def repeated_price_html() -> str:
    """Paragraph with a non-numeric price, repeated."""
    return "<p>Price: ABC123</p><p>Price: ABC123</p>"


@pytest.fixture
def clean_page() -> str:
    """Well-formed page with a working scroll-to-top button."""
    return (
        "<html><head><title>Listing</title></head><body>"
        '<header class="site-header" style="position: sticky; top: 0; z-index: 50;">Aqar</header>'
        "<p>Price: 2500000 EGP</p>"
        '<button class="scroll-to-top fixed" onclick="window.scrollTo(0, 0)">Top</button>'
        "</body></html>"
    )
