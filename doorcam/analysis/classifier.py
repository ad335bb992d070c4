from doorcam.analysis.models import EventCategory


# Detector vocabulary → semantic category. Case-sensitive on purpose:
# labels come straight from the COCO class list.
LABEL_CATEGORIES = {
    "person":   EventCategory.PERSON,
    "car":      EventCategory.VEHICLE,
    "truck":    EventCategory.VEHICLE,
    "bus":      EventCategory.VEHICLE,
    "cat":      EventCategory.ANIMAL,
    "dog":      EventCategory.ANIMAL,
    "bird":     EventCategory.ANIMAL,
    "backpack": EventCategory.PACKAGE,
    "handbag":  EventCategory.PACKAGE,
    "suitcase": EventCategory.PACKAGE,
}


def classify(label: str) -> EventCategory:
    """Map a raw detector label to its category. Unknown labels are MOVEMENT."""
    return LABEL_CATEGORIES.get(label, EventCategory.MOVEMENT)
