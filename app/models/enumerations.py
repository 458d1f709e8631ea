from enum import Enum

class EntityType(str, Enum):
    LEAD = "LEAD"
    CONTACT = "CONTACT"
    DEAL = "DEAL"

class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

class ScoreTier(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

class LeadSource(str, Enum):
    WEBSITE = "WEBSITE"
    REFERRAL = "REFERRAL"
    PAID_AD = "PAID_AD"
    SOCIAL = "SOCIAL"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    CONTENT = "CONTENT"
    OTHER = "OTHER"

class LeadStatus(str, Enum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    QUALIFIED = "QUALIFIED"
    CONVERTED = "CONVERTED"
    UNQUALIFIED = "UNQUALIFIED"

class ContactStatus(str, Enum):
    VIP = "VIP"
    ACTIVE = "ACTIVE"
    NEW = "NEW"
    INACTIVE = "INACTIVE"
    CHURNED = "CHURNED"

class ContactType(str, Enum):
    CUSTOMER = "CUSTOMER"
    PARTNER = "PARTNER"
    PROSPECT = "PROSPECT"
    VENDOR = "VENDOR"

class DealStage(str, Enum):
    LEAD = "LEAD"
    QUALIFIED = "QUALIFIED"
    PROPOSAL = "PROPOSAL"
    NEGOTIATION = "NEGOTIATION"
    CLOSED_WON = "CLOSED_WON"
    CLOSED_LOST = "CLOSED_LOST"

class DealPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

class DealStatus(str, Enum):
    OPEN = "OPEN"
    WON = "WON"
    LOST = "LOST"

class PipelineStage(str, Enum):
    """Sales-pipeline stages used by the stage-based forecast model."""
    PROSPECTING = "PROSPECTING"
    QUALIFICATION = "QUALIFICATION"
    NEED_ANALYSIS = "NEED_ANALYSIS"
    VALUE_PROPOSITION = "VALUE_PROPOSITION"
    PROPOSAL = "PROPOSAL"
    NEGOTIATION = "NEGOTIATION"

class ForecastModel(str, Enum):
    CONSERVATIVE = "conservative"
    AGGRESSIVE = "aggressive"
    ENSEMBLE = "ensemble"

class ABTestStatus(str, Enum):
    DRAFT = "DRAFT"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"

class Winner(str, Enum):
    A = "A"
    B = "B"
    INCONCLUSIVE = "INCONCLUSIVE"

class BehaviorEventType(str, Enum):
    CLICK = "CLICK"
    MOVE = "MOVE"
    SCROLL = "SCROLL"
    PAGE_VIEW = "PAGE_VIEW"
    FORM_SUBMIT = "FORM_SUBMIT"
