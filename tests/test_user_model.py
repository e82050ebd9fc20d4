# /tests/test_user_model.py

import pytest
from pydantic import ValidationError

from app.models.user_model import SignInRequest, SignUpRequest


@pytest.mark.parametrize("email", ["a@@b.co", "a b@x.io", "x@.", "me@exa mple.com", "no-at-sign.com"])
def test_sign_up_rejects_malformed_addresses(email):
    with pytest.raises(ValidationError):
        SignUpRequest(email=email, password="secret-pass", fullname="X")


def test_sign_up_lowercases_and_trims_email():
    request = SignUpRequest(email="  Mai.Nguyen@Example.COM ", password="secret-pass", fullname="Mai")
    assert request.email == "mai.nguyen@example.com"


def test_sign_in_normalizes_email_the_same_way():
    assert SignInRequest(email="Creator@Example.com", password="x").email == "creator@example.com"


def test_short_password_is_rejected():
    with pytest.raises(ValidationError):
        SignUpRequest(email="ok@example.com", password="123", fullname="X")
