from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping

from ..application import BeneficiaryOnboardingUseCase, OnboardingResult, VendorOnboardingUseCase, build_discount_payload
from ..clients import DiscountsClient
from ..exceptions import ApiError, ValidationError
from ..logger import get_logger, log_action
from ..reconciler import BENEFICIARY_SCHEMA, DISCOUNT_SCHEMA, VENDOR_SCHEMA, EntitySchema, normalize
from ..ui_errors import to_user_facing_error
from .feedback import Feedback
from .forms import FormResult, validate_fields

logger = get_logger("thrive_admin.ui.wizard")

SubmitFn = Callable[[dict[str, Any]], Any]


@dataclass(frozen=True)
class WizardStep:
    title: str
    fields: tuple[str, ...]
    required: tuple[str, ...] = ()


class WizardState(str, Enum):
    OPEN = "open"
    SUBMITTING = "submitting"
    CLOSED = "closed"


@dataclass
class WizardOutcome:
    submitted: bool
    result: Any = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class CreateWizard:
    name: str
    steps: tuple[WizardStep, ...]
    submit: SubmitFn
    schema: EntitySchema | None = None
    feedback: Feedback = field(default_factory=Feedback)

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError("A wizard needs at least one step")
        self.current = 0
        self.accumulator: dict[str, Any] = {}
        self.state = WizardState.OPEN
        self.outcome: WizardOutcome | None = None

    @property
    def step(self) -> WizardStep:
        return self.steps[self.current]

    @property
    def is_last(self) -> bool:
        return self.current == len(self.steps) - 1

    @property
    def next_label(self) -> str:
        return "Submit" if self.is_last else "Next"

    def step_values(self) -> dict[str, Any]:
        return {name: self.accumulator[name] for name in self.step.fields if name in self.accumulator}

    def _ensure_open(self) -> None:
        if self.state is not WizardState.OPEN:
            raise RuntimeError(f"{self.name} wizard is {self.state.value}")

    def next(self, values: Mapping[str, Any] | None = None) -> FormResult:
        self._ensure_open()
        step = self.step
        incoming = {key: value for key, value in (values or {}).items() if key in step.fields}
        result = validate_fields({**self.step_values(), **incoming}, step.required, self.schema)
        if not result.is_valid:
            missing = ", ".join(result.field_errors)
            self.feedback.toast("error", f"Please complete: {missing}")
            return result
        self.accumulator.update(result.values)
        if self.is_last:
            self._submit()
        else:
            self.current += 1
        return result

    def prev(self) -> int:
        self._ensure_open()
        self.current = max(0, self.current - 1)
        return self.current

    def cancel(self) -> None:
        self.accumulator.clear()
        self.state = WizardState.CLOSED
        log_action(logger, self.name, "wizard_cancel", None, "cancelled")

    def _submit(self) -> None:
        self.state = WizardState.SUBMITTING
        try:
            result = self.submit(dict(self.accumulator))
        except (ApiError, ValidationError) as exc:
            error = to_user_facing_error(exc, action=f"create {self.name}")
            message = f"{self.name.capitalize()} could not be created: {error.message}"
            self.feedback.toast("warning", message, error.technical_details)
            self.outcome = WizardOutcome(submitted=False, warnings=[message])
            log_action(logger, self.name, "create", None, "error", str(exc), level=logging.WARNING)
        else:
            warnings = [str(item) for item in getattr(result, "warnings", [])]
            for warning in warnings:
                self.feedback.toast("warning", warning)
            self.feedback.toast("success", f"{self.name.capitalize()} created.")
            self.outcome = WizardOutcome(submitted=True, result=result, warnings=warnings)
        finally:
            self.state = WizardState.CLOSED


VENDOR_STEPS = (
    WizardStep(
        "Basic Details",
        (
            "contact_name",
            "email",
            "vendor_name",
            "website",
            "address",
            "contact_number",
            "category",
            "description",
        ),
        required=(
            "contact_name",
            "email",
            "vendor_name",
            "website",
            "address",
            "contact_number",
            "category",
            "description",
        ),
    ),
    WizardStep(
        "Price and Discounts",
        (
            "pricing_tier",
            "discount.title",
            "discount.description",
            "discount.discount_type",
            "discount.discount_value",
            "discount.pos_code",
            "discount.usage_limit",
        ),
    ),
    WizardStep("Work Schedule", ("work_schedule", "logo")),
)

BENEFICIARY_STEPS = (
    WizardStep(
        "Basic Information",
        (
            "beneficiary_name",
            "category",
            "beneficiary_type",
            "contact_name",
            "contact_number",
            "website",
            "city",
            "state",
            "zip_code",
        ),
        required=("beneficiary_name", "category"),
    ),
    WizardStep(
        "Impact & Story",
        (
            "about",
            "why_this_matters",
            "success_story",
            "story_author",
            "lives_impacted",
            "programs_active",
            "direct_to_programs_percentage",
        ),
    ),
    WizardStep("Trust & Transparency", ("ein",)),
    WizardStep("Upload Images", ("main_image", "logo")),
)

DISCOUNT_STEPS = (
    WizardStep(
        "Discount Details",
        (
            "vendor_id",
            "title",
            "description",
            "discount_type",
            "discount_value",
            "pos_code",
            "usage_limit",
            "start_date",
            "end_date",
        ),
        required=("vendor_id", "title", "discount_type"),
    ),
)


def vendor_wizard(onboarding: VendorOnboardingUseCase, feedback: Feedback | None = None) -> CreateWizard:
    return CreateWizard(
        name="vendor",
        steps=VENDOR_STEPS,
        submit=onboarding.execute,
        schema=VENDOR_SCHEMA,
        feedback=feedback or Feedback(),
    )


def beneficiary_wizard(onboarding: BeneficiaryOnboardingUseCase, feedback: Feedback | None = None) -> CreateWizard:
    return CreateWizard(
        name="beneficiary",
        steps=BENEFICIARY_STEPS,
        submit=onboarding.execute,
        schema=BENEFICIARY_SCHEMA,
        feedback=feedback or Feedback(),
    )


def discount_wizard(
    discounts: DiscountsClient,
    *,
    vendor_id: str | None = None,
    feedback: Feedback | None = None,
) -> CreateWizard:
    def _submit(values: dict[str, Any]) -> OnboardingResult:
        payload = build_discount_payload(values, vendor_id=vendor_id)
        created = discounts.create(payload)
        return OnboardingResult(record=normalize(created or payload, DISCOUNT_SCHEMA), committed=["discount"])

    wizard = CreateWizard(
        name="discount",
        steps=DISCOUNT_STEPS,
        submit=_submit,
        schema=DISCOUNT_SCHEMA,
        feedback=feedback or Feedback(),
    )
    if vendor_id:
        wizard.accumulator["vendor_id"] = vendor_id
    return wizard
