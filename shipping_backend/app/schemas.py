from pydantic import BaseModel
from typing import Optional, List


# --- Shipping options (checkout) ---
class ZoneRef(BaseModel):
    id: int
    name: str


class RateOption(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    base_cost: float
    final_cost: float  # after free shipping
    is_free: bool
    estimated_days: Optional[str] = None
    carrier: Optional[str] = None
    time_window: Optional[str] = None
    group_id: int
    group_name: Optional[str] = None
    min_order_amount: Optional[float] = None
    max_order_amount: Optional[float] = None


class RateGroupOption(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    rates: List[RateOption]


class ShippingOptionsResponse(BaseModel):
    """status: ok | no_coverage | no_eligible_options"""
    status: str
    zone: Optional[ZoneRef] = None
    groups: List[RateGroupOption] = []
    # Amount to add to the cart to unlock shipping (no_eligible_options only)
    shortfall: Optional[float] = None
    message: Optional[str] = None


# --- Estimate (legacy single-cost API) ---
class ShippingEstimateResponse(BaseModel):
    cost: float
    zone_name: str
    estimated_days: str
    is_free: bool
    rate_id: Optional[int] = None
    # rate | first_rate | zone_default | system_default | degraded
    source: str


class CoverageResponse(BaseModel):
    covered: bool
    zone_id: Optional[int] = None
    zone_name: Optional[str] = None


# --- Selected rate ---
class GroupRef(BaseModel):
    id: int
    name: str


class RateDetailsResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    base_cost: float
    min_order_amount: Optional[float] = None
    max_order_amount: Optional[float] = None
    free_shipping_min: Optional[float] = None
    estimated_days: Optional[str] = None
    carrier: Optional[str] = None
    time_window: Optional[str] = None
    group: GroupRef
    zone: ZoneRef


class RateQuoteResponse(BaseModel):
    rate_id: int
    cost: float
    base_cost: float
    is_free: bool
    free_shipping_min: Optional[float] = None
    eligible: bool


# --- Locations ---
class DepartmentResponse(BaseModel):
    id: int
    code: str
    name: str


class ProvinceResponse(BaseModel):
    id: int
    code: str
    name: str
    department_id: int


class DistrictResponse(BaseModel):
    id: int
    code: str
    name: str
    province_id: int


class LocationResponse(BaseModel):
    district: str
    province: str
    department: str
    district_code: str
    province_code: str
    department_code: str
