from .detail_view import DetailState, DetailView
from .feedback import Feedback, Notice
from .listing_view import ListingPage, ListView
from .wizard import CreateWizard, WizardStep, beneficiary_wizard, discount_wizard, vendor_wizard

__all__ = [
    "CreateWizard",
    "DetailState",
    "DetailView",
    "Feedback",
    "ListView",
    "ListingPage",
    "Notice",
    "WizardStep",
    "beneficiary_wizard",
    "discount_wizard",
    "vendor_wizard",
]
