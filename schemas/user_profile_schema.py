from __future__ import annotations

from enum import Enum

from pydantic import Field

from schemas.primitives import (
    Email,
    EntitySchema,
    PhoneNumber,
    SecureUrl,
    optional,
    required_text,
)

DEFAULT_TIMEZONE = "Asia/Tokyo"

DisplayName = required_text(1, 100)
TimezoneName = required_text(1, 50)
OptionalPhone = optional(PhoneNumber)
OptionalUrl = optional(SecureUrl)


class Language(str, Enum):
    JA = "ja"
    EN = "en"


class NotificationPreferences(EntitySchema):
    email_notifications: bool = True
    sms_notifications: bool = False
    push_notifications: bool = True


class UserProfile(EntitySchema):
    display_name: DisplayName
    email: Email
    phone: OptionalPhone = None
    language: Language = Language.JA
    timezone: TimezoneName = DEFAULT_TIMEZONE
    avatar_url: OptionalUrl = None
    notification_preferences: NotificationPreferences = Field(default_factory=NotificationPreferences)
    is_active: bool = True
