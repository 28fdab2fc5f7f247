"""
Extraction Data Models

Types produced by text-to-structure extraction:
- Purpose, PropertyType and PriceRange enums
- ExtractedFields: one structured record per input text
- MobileDisplay: presentation bundle for a single mobile number
- ChatMessage: one parsed line of a chat export
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================


class Purpose(str, Enum):
    """Why the listing was posted."""
    SALE = "sale"
    RENT = "rent"
    WANTED = "wanted"  # Buyer or tenant looking for a unit
    UNKNOWN = "unknown"


class PropertyType(str, Enum):
    """Property category. Declaration order is the classification priority."""
    APARTMENT = "apartment"
    VILLA = "villa"
    LAND = "land"
    OFFICE = "office"
    WAREHOUSE = "warehouse"
    OTHER = "other"


class PriceRange(str, Enum):
    """Price band used by the analytics view."""
    LOW = "low"  # < 1,000,000
    MEDIUM = "medium"  # < 5,000,000
    HIGH = "high"
    UNKNOWN = "unknown"


# =============================================================================
# RECORDS
# =============================================================================


@dataclass(frozen=True)
class ExtractedFields:
    """Structured fields extracted from one raw listing text."""
    purpose: Purpose = Purpose.UNKNOWN
    area: Optional[str] = None
    price: Optional[Decimal] = None
    price_range: PriceRange = PriceRange.UNKNOWN
    broker_name: Optional[str] = None
    broker_mobile: Optional[str] = None
    property_type: PropertyType = PropertyType.OTHER
    keywords: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to column-ready dictionary."""
        return {
            "purpose": self.purpose.value,
            "area": self.area,
            "price": self.price,
            "price_range": self.price_range.value,
            "broker_name": self.broker_name,
            "broker_mobile": self.broker_mobile,
            "property_type": self.property_type.value,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class MobileDisplay:
    """How a contact number is shown to a given viewer."""
    original: str
    is_valid: bool = False
    formatted: str = ""
    masked: str = ""
    displayed: str = ""


@dataclass
class ChatMessage:
    """A single message parsed from a chat export."""
    sender: str
    message: str
    timestamp: str
    fields: ExtractedFields = field(default_factory=ExtractedFields)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten message and extracted fields into one row."""
        row = {
            "sender": self.sender,
            "message": self.message,
            "timestamp": self.timestamp,
        }
        row.update(self.fields.to_dict())
        return row
