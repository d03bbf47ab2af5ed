from typing import List

from src.platform.exception.exceptions import ValidationError


def normalize_seat_labels(seat_labels: List[str]) -> List[str]:
    """Strip labels and reject empty selections, blank labels and duplicates. Keeps order."""
    if not seat_labels:
        raise ValidationError('Please select at least one seat')

    normalized = [label.strip() if isinstance(label, str) else '' for label in seat_labels]
    if any(not label for label in normalized):
        raise ValidationError('Seat labels must be non-empty strings')

    duplicates = sorted({label for label in normalized if normalized.count(label) > 1})
    if duplicates:
        raise ValidationError(f'Duplicate seats in selection: {", ".join(duplicates)}')

    return normalized
