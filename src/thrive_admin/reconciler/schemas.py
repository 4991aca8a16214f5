from __future__ import annotations

from ..models import Beneficiary, Discount, Vendor
from .field_spec import EntitySchema, FieldKind, FieldSpec

# Keys the current backend rejects with a 400. Remove entries once the
# matching columns are migrated.
VENDOR_DENY_LIST = frozenset({"verification_status", "verificationStatus"})

BENEFICIARY_DENY_LIST = frozenset(
    {
        "email",
        "primaryEmail",
        "verification_status",
        "verificationStatus",
        "communities_served",
        "communitiesServed",
        "families_helped",
        "familiesHelped",
        "direct_to_programs",
        "directToPrograms",
        "impact_statement_1",
        "impact_statement_2",
        "impactStatement1",
        "impactStatement2",
        "transparency_rating",
        "likes",
        "mutual",
        "social",
        "additional_images",
        "profile_links",
        "latitude",
        "longitude",
    }
)

DISCOUNT_DENY_LIST = frozenset({"min_purchase", "max_discount", "minPurchase", "maxDiscount"})

_ID = FieldSpec("id", ("id", "_id", "uuid"), fallback="", write_keys=("id",))
_CITY = FieldSpec("city", ("city", "address.city"), write_keys=("city",))
_STATE = FieldSpec("state", ("state", "address.state"), write_keys=("state",))
_ZIP = FieldSpec(
    "zip_code",
    ("zip_code", "zipCode", "zip", "postal_code", "address.zipCode", "address.zip_code", "address.zip"),
    write_keys=("zip_code",),
    label="ZIP code",
)
_LOCATION = FieldSpec(
    "location",
    ("location", "city_state", "cityState"),
    kind=FieldKind.LOCATION,
    write_keys=("location",),
    label="City/State",
)
_BANK_ACCOUNT = FieldSpec(
    "bank_account",
    ("bank_account", "bankAccount", "account_number", "accountNumber", "bank_info.account_number"),
    kind=FieldKind.MASKED,
    write_keys=("bank_account",),
)
_JOINED_ON = FieldSpec(
    "joined_on",
    ("created_at", "createdAt", "date_of_join", "dateOfJoin", "joined_at"),
    kind=FieldKind.DATE,
    label="Date of join",
)

VENDOR_SCHEMA = EntitySchema(
    name="vendor",
    model=Vendor,
    fields=(
        _ID,
        FieldSpec(
            "vendor_name",
            ("name", "vendor_name", "vendorName", "company_name", "companyName"),
            write_keys=("name",),
            required=True,
            label="Vendor name",
        ),
        FieldSpec(
            "contact_name",
            ("contact_name", "contactName", "primary_contact", "primaryContact", "owner_name"),
            write_keys=("contact_name", "primary_contact"),
        ),
        FieldSpec(
            "email",
            ("email", "primary_email", "primaryEmail", "contact_email", "contactEmail"),
            write_keys=("email", "primary_email"),
        ),
        FieldSpec(
            "contact_number",
            ("phone", "phone_number", "phoneNumber", "contact_number", "contactNumber"),
            write_keys=("phone",),
            label="Phone",
        ),
        FieldSpec("website", ("website", "website_url", "websiteLink", "website_link"), write_keys=("website",)),
        FieldSpec("category", ("category", "vendor_type", "vendorType", "type"), write_keys=("category",)),
        FieldSpec("description", ("description", "about"), write_keys=("description",)),
        FieldSpec("address", ("address", "address.street", "street", "address_line"), write_keys=("address",)),
        _CITY,
        _STATE,
        _ZIP,
        _LOCATION,
        _BANK_ACCOUNT,
        FieldSpec("pricing_tier", ("pricing_tier", "pricingTier", "price_range"), write_keys=("pricing_tier",)),
        FieldSpec("status", ("status", "vendor_status"), write_keys=("status",)),
        FieldSpec(
            "active",
            ("is_active", "isActive", "active"),
            kind=FieldKind.BOOLEAN,
            fallback=True,
            write_keys=("is_active",),
        ),
        FieldSpec(
            "enabled",
            ("enabled", "is_enabled", "isEnabled"),
            kind=FieldKind.BOOLEAN,
            fallback=True,
            write_keys=("enabled",),
        ),
        FieldSpec(
            "logo_url",
            ("logo_url", "logoUrl", "logo", "image_url"),
            write_keys=("logo_url",),
            send_null_to_clear=True,
        ),
        FieldSpec(
            "work_schedule",
            ("hours", "work_schedule", "workSchedule"),
            kind=FieldKind.MAPPING,
            fallback=None,
            write_keys=("hours",),
        ),
        FieldSpec(
            "customers",
            ("customers", "customer_count", "customers_count", "total_customers"),
            kind=FieldKind.NUMBER,
            fallback=0,
        ),
        FieldSpec(
            "revenue",
            ("revenue", "total_revenue", "totalRevenue"),
            kind=FieldKind.NUMBER,
            fallback=0,
        ),
        _JOINED_ON,
    ),
    deny_list=VENDOR_DENY_LIST,
    list_columns=(
        ("vendor_name", "Vendor"),
        ("contact_name", "Contact"),
        ("email", "Email"),
        ("contact_number", "Phone"),
        ("location", "City/State"),
        ("category", "Category"),
        ("active", "Status"),
    ),
    search_fields=("vendor_name", "contact_name", "email", "category", "location"),
    filter_fields={"category": ("category",), "type": ("category",)},
)

BENEFICIARY_SCHEMA = EntitySchema(
    name="beneficiary",
    model=Beneficiary,
    fields=(
        _ID,
        FieldSpec(
            "beneficiary_name",
            ("name", "beneficiary_name", "beneficiaryName", "organization_name", "charity_name"),
            write_keys=("name",),
            required=True,
            label="Beneficiary name",
        ),
        FieldSpec(
            "category",
            ("category", "cause", "beneficiary_cause", "beneficiaryCause"),
            write_keys=("category",),
            required=True,
        ),
        FieldSpec(
            "beneficiary_type",
            ("type", "beneficiary_type", "beneficiaryType", "size"),
            fallback="Medium",
            write_keys=("type",),
            label="Type",
        ),
        FieldSpec(
            "contact_name",
            ("contact_name", "contactName", "primary_contact", "primaryContact"),
            write_keys=("contact_name",),
        ),
        FieldSpec("email", ("email", "primary_email", "primaryEmail", "contact_email")),
        FieldSpec(
            "contact_number",
            ("phone", "phone_number", "phoneNumber", "contact_number", "contactNumber"),
            write_keys=("phone",),
            label="Phone",
        ),
        FieldSpec("website", ("website", "website_url", "websiteLink"), write_keys=("website",)),
        FieldSpec("ein", ("ein", "tax_id", "taxId"), write_keys=("ein",), label="EIN"),
        FieldSpec("about", ("description", "about", "mission"), write_keys=("description",)),
        FieldSpec(
            "why_this_matters",
            ("why_this_matters", "whyThisMatters"),
            write_keys=("why_this_matters",),
        ),
        FieldSpec("success_story", ("success_story", "successStory"), write_keys=("success_story",)),
        FieldSpec("story_author", ("story_author", "storyAuthor"), write_keys=("story_author",)),
        _CITY,
        _STATE,
        _ZIP,
        _LOCATION,
        FieldSpec(
            "lives_impacted",
            ("lives_impacted", "livesImpacted"),
            kind=FieldKind.NUMBER,
            fallback=0,
            write_keys=("lives_impacted", "livesImpacted"),
        ),
        FieldSpec(
            "programs_active",
            ("programs_active", "programsActive"),
            kind=FieldKind.NUMBER,
            fallback=0,
            write_keys=("programs_active", "programsActive"),
        ),
        FieldSpec(
            "direct_to_programs_percentage",
            ("direct_to_programs_percentage", "directToProgramsPercentage"),
            kind=FieldKind.NUMBER,
            fallback=0,
            write_keys=("direct_to_programs_percentage", "directToProgramsPercentage"),
        ),
        FieldSpec(
            "main_image_url",
            ("main_image_url", "imageUrl", "main_image", "image_url"),
            write_keys=("imageUrl", "main_image", "main_image_url"),
            send_null_to_clear=True,
            label="Main image",
        ),
        FieldSpec(
            "logo_url",
            ("logo_url", "logoUrl", "logo"),
            write_keys=("logoUrl", "logo", "logo_url"),
            send_null_to_clear=True,
            label="Logo",
        ),
        FieldSpec(
            "is_active",
            ("is_active", "isActive", "active"),
            kind=FieldKind.BOOLEAN,
            fallback=True,
            write_keys=("is_active", "isActive"),
        ),
        _BANK_ACCOUNT,
        FieldSpec("verification_status", ("verification_status", "verificationStatus")),
        FieldSpec("donors", ("donors", "donor_count", "donorCount"), kind=FieldKind.NUMBER, fallback=0),
        _JOINED_ON,
    ),
    deny_list=BENEFICIARY_DENY_LIST,
    list_columns=(
        ("beneficiary_name", "Beneficiary"),
        ("category", "Cause"),
        ("beneficiary_type", "Type"),
        ("location", "Location"),
        ("lives_impacted", "Lives impacted"),
        ("is_active", "Status"),
    ),
    search_fields=("beneficiary_name", "category", "location", "contact_name", "about"),
    filter_fields={"category": ("category",), "type": ("beneficiary_type",)},
)

DISCOUNT_SCHEMA = EntitySchema(
    name="discount",
    model=Discount,
    fields=(
        _ID,
        FieldSpec(
            "vendor_id",
            ("vendor_id", "vendorId", "vendor.id"),
            write_keys=("vendor_id", "vendorId"),
            required=True,
            label="Vendor",
        ),
        FieldSpec("vendor_name", ("vendor_name", "vendorName", "vendor.name", "vendors.name")),
        FieldSpec("category", ("category", "vendor.category", "vendors.category")),
        FieldSpec(
            "title",
            ("title", "name", "discount_name", "discountName"),
            write_keys=("title",),
            required=True,
            label="Discount name",
        ),
        FieldSpec(
            "description",
            ("description", "details", "discount_on", "discountOn"),
            write_keys=("description",),
        ),
        FieldSpec(
            "discount_type",
            ("discount_type", "discountType", "type"),
            fallback="percentage",
            write_keys=("discount_type", "discountType"),
            label="Type",
        ),
        FieldSpec(
            "discount_value",
            ("discount_value", "discountValue", "value", "amount"),
            kind=FieldKind.NUMBER,
            fallback=0,
            write_keys=("discount_value", "discountValue"),
            label="Value",
        ),
        FieldSpec(
            "pos_code",
            ("discount_code", "discountCode", "pos_code", "posCode", "promo_code", "promoCode"),
            write_keys=("discount_code", "discountCode"),
            label="POS code",
        ),
        FieldSpec(
            "usage_limit",
            ("usage_limit", "usageLimit"),
            write_keys=("usage_limit", "usageLimit"),
        ),
        FieldSpec(
            "start_date",
            ("start_date", "startDate", "valid_from"),
            kind=FieldKind.DATE,
            write_keys=("start_date", "startDate"),
        ),
        FieldSpec(
            "end_date",
            ("end_date", "endDate", "valid_until", "expires_at"),
            kind=FieldKind.DATE,
            write_keys=("end_date", "endDate"),
        ),
        FieldSpec(
            "is_active",
            ("is_active", "isActive", "active"),
            kind=FieldKind.BOOLEAN,
            fallback=True,
            write_keys=("is_active", "isActive"),
        ),
        FieldSpec("created_on", ("created_at", "createdAt"), kind=FieldKind.DATE),
    ),
    deny_list=DISCOUNT_DENY_LIST,
    list_columns=(
        ("title", "Discount"),
        ("vendor_name", "Vendor"),
        ("discount_type", "Type"),
        ("discount_value", "Value"),
        ("pos_code", "POS code"),
        ("end_date", "Ends"),
        ("is_active", "Status"),
    ),
    search_fields=("title", "description", "pos_code", "vendor_name"),
    filter_fields={
        "category": ("category",),
        "vendor": ("vendor_id", "vendor_name"),
        "type": ("discount_type",),
    },
)

SCHEMAS: dict[str, EntitySchema] = {
    "vendors": VENDOR_SCHEMA,
    "beneficiaries": BENEFICIARY_SCHEMA,
    "discounts": DISCOUNT_SCHEMA,
}
