"""Translation between the web form's passenger JSON and Odoo's fields.

Odoo side: custom ``x_tour_departure_passenger`` records, looked up by the
booking token stored in ``x_studio_test_token``, and their
``x_tour_departure`` departure.
"""

import re

PASSENGER_MODEL = "x_tour_departure_passenger"
DEPARTURE_MODEL = "x_tour_departure"
TOKEN_FIELD = "x_studio_test_token"

PASSENGER_FIELDS = [
    # linkage
    TOKEN_FIELD,
    "x_partner_id",
    "x_departure_id",
    "x_tour_departure",
    # personal / contact
    "x_name",
    "x_passenger_first_name",
    "x_passenger_last_name",
    "x_passenger_middle_name",
    "x_passenger_email",
    "x_date_of_birth",
    "x_sex",
    "x_marrital_status",
    "x_nationality",
    "x_home_address",
    "x_job_position",
    "x_working_at",
    # travel / rooming
    "x_type_of_room",
    "x_sharing_with",
    "x_pre_tour_extra_night",
    "x_post_tour_extra_night",
    "x_flight_arrival",
    "x_flight_departure",
    # health / diet
    "x_diet",
    "x_allergies",
    "x_medical_conditions",
    # emergency
    "x_emergency_contact",
    "x_emergency_contact_number",
    # passport
    "x_passport_number",
    "x_passport_issue_date",
    "x_passport_expiry_date",
    "x_notes",
]

DEPARTURE_FIELDS = ["x_name", "x_departure_date", "x_end_date"]

# Loaded as-is; falsy Odoo values come out as None.
_PLAIN_FIELDS = {
    "first_name": "x_passenger_first_name",
    "middle_name": "x_passenger_middle_name",
    "last_name": "x_passenger_last_name",
    "sex": "x_sex",
    "marital_status": "x_marrital_status",
    "date_of_birth": "x_date_of_birth",
    "nationality": "x_nationality",
    "email": "x_passenger_email",
    "home_address": "x_home_address",
    "job_position": "x_job_position",
    "working_at": "x_working_at",
    "type_of_room": "x_type_of_room",
    "sharing_with": "x_sharing_with",
    "pre_tour_extra_night": "x_pre_tour_extra_night",
    "post_tour_extra_night": "x_post_tour_extra_night",
    "flight_arrival": "x_flight_arrival",
    "flight_departure": "x_flight_departure",
    "diet": "x_diet",
    "allergies": "x_allergies",
    "medical_conditions": "x_medical_conditions",
    "emergency_contact": "x_emergency_contact",
    "emergency_contact_number": "x_emergency_contact_number",
    "passport_issue_date": "x_passport_issue_date",
    "passport_expiry_date": "x_passport_expiry_date",
    "notes": "x_notes",
}

# The only keys a save may write. Anything else in the payload is dropped.
EDITABLE_TEXT_FIELDS = {
    "first_name": "x_passenger_first_name",
    "middle_name": "x_passenger_middle_name",
    "last_name": "x_passenger_last_name",
    "email": "x_passenger_email",
    "nationality": "x_nationality",
    "home_address": "x_home_address",
    "job_position": "x_job_position",
    "working_at": "x_working_at",
    "passport_number": "x_passport_number",
    "notes": "x_notes",
}
EDITABLE_DATE_FIELDS = {
    "date_of_birth": "x_date_of_birth",
    "passport_issue_date": "x_passport_issue_date",
    "passport_expiry_date": "x_passport_expiry_date",
}

_DATE_RE = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4})")

_RATHER_NOT_SAY = {"rather not say", "rather_not_say", "prefer not to say"}
_SEX_VALUES = {"male": "MALE", "female": "FEMALE"}
_MARITAL_VALUES = {"single": "SINGLE", "married": "MARRIED"}


def to_odoo_date(value):
    """Turn ``dd/mm/yyyy`` into ``yyyy-mm-dd``; return anything else untouched."""
    if not isinstance(value, str):
        return value
    match = _DATE_RE.fullmatch(value)
    if not match:
        return value
    day, month, year = match.groups()
    return f"{year}-{month}-{day}"


def _normalize_choice(value, choices):
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in choices:
        return choices[lowered]
    if lowered in _RATHER_NOT_SAY:
        return "RATHER_NOT_SAY"
    return text


def normalize_sex(value):
    return _normalize_choice(value, _SEX_VALUES)


def normalize_marital_status(value):
    return _normalize_choice(value, _MARITAL_VALUES)


def m2o_to_dict(value):
    """Decode a many2one ``[id, name]`` pair; ``False`` and junk give ``None``."""
    if isinstance(value, (list, tuple)) and len(value) >= 2:
        return {"id": value[0], "name": value[1]}
    return None


def departure_id_of(record):
    """Departure id referenced by a passenger record, if any."""
    for field in ("x_departure_id", "x_tour_departure"):
        ref = m2o_to_dict(record.get(field))
        if ref:
            return ref["id"]
    return None


def departure_to_external(record):
    return {
        "id": record.get("id"),
        "name": record.get("x_name") or None,
        "start_date": record.get("x_departure_date") or None,
        "end_date": record.get("x_end_date") or None,
    }


def passenger_to_external(record):
    partner = m2o_to_dict(record.get("x_partner_id"))
    passenger = {
        "id": record.get("id"),
        "token": record.get(TOKEN_FIELD) or None,
        "partner": partner,
        "name": record.get("x_name") or (partner and partner["name"]) or None,
        "departure_m2o": m2o_to_dict(record.get("x_departure_id")),
        "tour_departure_m2o": m2o_to_dict(record.get("x_tour_departure")),
        "passport_number": record.get("x_passport_number") or "",
    }
    for key, field in _PLAIN_FIELDS.items():
        passenger[key] = record.get(field) or None
    return passenger


def passenger_to_internal(entry):
    """Build the Odoo ``write`` values for one submitted passenger.

    Only string values of allow-listed keys are considered; ``id`` and any
    unknown key never reach Odoo.
    """
    values = {}

    for key, field in EDITABLE_TEXT_FIELDS.items():
        if isinstance(entry.get(key), str):
            values[field] = entry[key]

    for key, field in EDITABLE_DATE_FIELDS.items():
        raw = entry.get(key)
        if isinstance(raw, str):
            values[field] = to_odoo_date(raw) if raw.strip() else False

    if isinstance(entry.get("sex"), str):
        sex = normalize_sex(entry["sex"])
        if sex:
            values["x_sex"] = sex

    if isinstance(entry.get("marital_status"), str):
        status = normalize_marital_status(entry["marital_status"])
        if status:
            values["x_marrital_status"] = status

    return values
