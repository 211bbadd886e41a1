"""
Trusted-caller ("admin bypass") checks.

There is no staff login in this service. Admin-only behaviour (seeing a PIN,
skipping PIN verification) is unlocked by a static shared secret sent in a
header, or by the admin UI's explicit body flags.
"""

import hmac


def has_admin_secret(request, header: str, config) -> bool:
    supplied = request.headers.get(header, "")
    if not supplied or not config.admin_secret:
        return False
    return hmac.compare_digest(supplied.encode(), config.admin_secret.encode())


def is_trusted_caller(request, config, header="X-Admin-Pin", flags=("admin",)) -> bool:
    data = request.data if hasattr(request.data, "get") else {}
    if any(data.get(flag) is True for flag in flags):
        return True
    return has_admin_secret(request, header, config)
