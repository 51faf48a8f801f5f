# agilesync/shared/error_codes.py
# Central mapping that aligns with the error contract.
# Keep keys stable; API clients rely on these.
ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 422,
        "message": "Validation failed for one or more fields."
    },
    "invalid_request": {
        "http": 400,
        "message": "Invalid request payload."
    },

    # ─── Authentication & Authorization ────────────────────────────────────
    "unauthorized": {
        "http": 401,
        "message": "Unauthorized. Please provide valid credentials."
    },
    "invalid_credentials": {
        "http": 401,
        "message": "Invalid email or password."
    },
    "forbidden": {
        "http": 403,
        "message": "You are not allowed to perform this action."
    },

    # ─── Resources ─────────────────────────────────────────────────────────
    "not_found": {
        "http": 404,
        "message": "Requested resource not found."
    },
    "user_not_found": {
        "http": 404,
        "message": "User not found."
    },
    "organization_not_found": {
        "http": 404,
        "message": "Organization not found."
    },
    "membership_not_found": {
        "http": 404,
        "message": "User is not a member of this organization."
    },
    "conflict": {
        "http": 409,
        "message": "Resource already exists."
    },
    "concurrent_modification": {
        "http": 409,
        "message": "Resource was modified concurrently; retry the request."
    },

    # ─── Server ────────────────────────────────────────────────────────────
    "store_unavailable": {
        "http": 503,
        "message": "Backing store is unavailable."
    },
    "misconfigured": {
        "http": 500,
        "message": "Server misconfiguration."
    },
    "internal_error": {
        "http": 500,
        "message": "Internal server error."
    },
}
