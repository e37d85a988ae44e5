"""Public-address announcements read out for each alert type."""

from __future__ import annotations

from pydantic import BaseModel

from src.core.config import ProtocolConfig
from src.core.types import AlertType


class ProtocolMessage(BaseModel):
    """Announcement and all-clear text for one alert type."""

    type: AlertType
    message: str
    release_message: str


PROTOCOL_MESSAGES: dict[AlertType, ProtocolMessage] = {
    m.type: m
    for m in (
        ProtocolMessage(
            type=AlertType.HOLD,
            message="Hold! Remain in your room or area. Clear the halls and outdoor areas.",
            release_message="Students and Staff, the hold has been released.",
        ),
        ProtocolMessage(
            type=AlertType.SECURE,
            message="Secure! Get inside. Lock outside doors.",
            release_message="The Secure is released. All clear.",
        ),
        ProtocolMessage(
            type=AlertType.LOCKDOWN,
            message="Lockdown! Locks, Lights, Out of Sight!",
            # Lockdowns are released in person by responders.
            release_message="NO PUBLIC RELEASE!!",
        ),
        ProtocolMessage(
            type=AlertType.EVACUATE,
            message="Evacuate to {location}!",
            release_message="Evacuation is over, please return to class.",
        ),
        ProtocolMessage(
            type=AlertType.SHELTER,
            message="Shelter for {hazard}!",
            release_message="Shelter is released. All clear.",
        ),
    )
}


def get_protocol_message(
    alert_type: AlertType | str | None,
    config: ProtocolConfig | None = None,
) -> str:
    """Announcement for *alert_type* with placeholders filled, or ``""``."""
    parsed = AlertType.parse(alert_type)
    if parsed is None:
        return ""
    config = config or ProtocolConfig()
    message = PROTOCOL_MESSAGES[parsed].message
    if config.evacuation_location:
        message = message.replace("{location}", config.evacuation_location)
    if config.shelter_hazard:
        message = message.replace("{hazard}", config.shelter_hazard)
    return message


def get_release_message(alert_type: AlertType | str | None) -> str:
    """All-clear text for *alert_type*, or ``""`` for an unknown type."""
    parsed = AlertType.parse(alert_type)
    if parsed is None:
        return ""
    return PROTOCOL_MESSAGES[parsed].release_message
