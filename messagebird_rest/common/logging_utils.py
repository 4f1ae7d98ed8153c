import hashlib


def mask_access_key(key: str | None) -> str | None:
    if not key:
        return key

    if len(key) <= 8:
        return "***"

    # keep the test_/live_ prefix and the last four characters
    return f"{key[:4]}...{key[-4:]}"


def mask_phone(phone: str | int | None) -> str | None:
    """Last four digits plus a short hash, so records stay correlatable."""
    if phone is None or phone == "":
        return phone
    phone = str(phone)
    digest = hashlib.sha256(phone.encode("utf-8")).hexdigest()[:8]
    return f"...{phone[-4:]}#{digest}"


def shorten_body(body: str | None, max_len: int = 40) -> str | None:
    if body is None:
        return None
    return body if len(body) <= max_len else body[:max_len] + "..."
