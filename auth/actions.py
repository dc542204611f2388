"""Login form action."""

from typing import Any, Callable, Mapping

from auth.exceptions import AuthError

GENERIC_MESSAGE = "Something went wrong."

AUTH_ERROR_MESSAGES = {
    "CredentialsSignin": "Invalid credentials.",
}


class CredentialsAuthenticator:
    """Runs a credentials sign-in and turns auth failures into form text.

    Only AuthError is translated. Any other exception propagates unchanged.
    """

    def __init__(self, sign_in: Callable[[str, Mapping[str, Any]], Any]):
        self._sign_in = sign_in

    def authenticate(self, prev_state: str | None, form_data: Mapping[str, Any]) -> str | None:
        """
        Sign in with the submitted credentials.

        Args:
            prev_state: Message returned by the previous attempt, if any
            form_data: Login form fields (email, password)

        Returns:
            None on success, otherwise a short message for the login form.
        """
        try:
            self._sign_in("credentials", form_data)
        except AuthError as e:
            return AUTH_ERROR_MESSAGES.get(e.kind, GENERIC_MESSAGE)

        return None
