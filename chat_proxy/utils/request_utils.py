from fastapi import Request


def get_client_ip(request: Request, trust_forwarded: bool = False) -> str:
    """
    Extract client IP address from request.

    Forwarded headers are client-controlled, so they are only honored when the
    app runs behind a trusted reverse proxy (``trust_forwarded=True``).
    """
    if trust_forwarded:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

    if request.client:
        return request.client.host

    return "unknown"
