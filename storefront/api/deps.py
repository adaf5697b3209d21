# storefront/api/deps.py
import uuid

from fastapi import Request, Response

from storefront.utils.settings import CART_COOKIE_NAME, CART_COOKIE_MAX_AGE, COOKIE_SECURE


def get_session_token(request: Request) -> str | None:
    """Token sesji z ciasteczka, brak tokenu == brak koszyka."""
    return request.cookies.get(CART_COOKIE_NAME) or None


def ensure_session_token(request: Request, response: Response) -> str:
    """Dla komend: jesli klient nie ma tokenu, wystawiamy nowy (dlugo zyjacy)."""
    token = request.cookies.get(CART_COOKIE_NAME)

    if not token:
        token = str(uuid.uuid4())
        response.set_cookie(
            key=CART_COOKIE_NAME,
            value=token,
            max_age=CART_COOKIE_MAX_AGE,
            httponly=True,
            secure=COOKIE_SECURE,
            samesite="lax",
            path="/",
        )

    return token
