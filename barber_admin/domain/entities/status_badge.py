from dataclasses import dataclass


@dataclass(frozen=True)
class StatusBadge:
    label: str
    color_class: str  # "success" | "warning" | "danger" | "info" | "primary" | "default"
    category: str
