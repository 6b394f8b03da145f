from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DeviceUsage = Literal["yes", "no", ""]


class FormData(BaseModel):
    """Field values collected by the wizard. Every field starts empty."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    yeshiva_name: str = ""
    manager_name: str = ""
    phone_number: str = ""
    campaign_duration: str = ""
    campaign_goal: str = ""
    average_students: str = ""
    uses_field_devices: DeviceUsage = ""
    device_count: str = ""
    device_type: str = ""
    device_provider: str = ""
    clearing_company: str = ""
    special_remarks: str = ""


class Submission(FormData):
    """A finished wizard run. Immutable once built."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    timestamp: str
    calculated_price: str
