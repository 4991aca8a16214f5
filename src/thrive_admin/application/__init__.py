from .onboarding import (
    BeneficiaryOnboardingUseCase,
    OnboardingResult,
    VendorOnboardingUseCase,
    build_discount_payload,
)

__all__ = [
    "BeneficiaryOnboardingUseCase",
    "OnboardingResult",
    "VendorOnboardingUseCase",
    "build_discount_payload",
]
