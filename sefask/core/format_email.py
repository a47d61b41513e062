"""Email Formatting — pure rendering of the verification email.

Invariants:
    - Output is deterministic for (first_name, code, ttl)
    - User-supplied first_name is HTML-escaped before interpolation

Design Decisions:
    - Rendering lives in core (pure string work); the HTTP client only transports it
"""

from dataclasses import dataclass
from datetime import timedelta
from html import escape

from sefask.core.domain_types import VERIFICATION_CODE_TTL

VERIFICATION_SUBJECT = "Verify Your Email Address - Sefask"

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <head><meta charset="UTF-8" /><title>Email Verification</title></head>
  <body style="margin:0; padding:40px 20px; background-color:#0e0e0e; font-family:'Inter',sans-serif; color:#fafafa;">
    <div style="max-width:600px; width:90%; margin:auto;">
      <h2 style="color:#ffffff; font-weight:700; text-align:center;">Sefask</h2>
      <div style="background-color:#262626; border:1px solid rgba(255,255,255,0.1); padding:30px; color:#dcdcdc;">
        <p style="color:#ffffff; font-weight:bold;">Dear {first_name},</p>
        <p>Thanks for signing up! You're one step closer to start using Sefask.
          Please use the verification code below to verify your email address.</p>
        <p style="color:#aaaaaa;">This code will expire in {minutes} minutes.</p>
        <div style="background-color:#ebebeb; color:#1a1a1a; font-size:24px; font-weight:700; letter-spacing:8px; padding:14px 30px; margin:40px auto; width:fit-content;">{code}</div>
        <p style="color:#a1a1a1; font-size:12px; text-align:center;">If you did not create a Sefask account, you can safely ignore this email.</p>
      </div>
    </div>
  </body>
</html>
"""

_TEXT_TEMPLATE = (
    "Dear {first_name},\n\n"
    "Your Sefask verification code is {code}.\n"
    "This code will expire in {minutes} minutes.\n\n"
    "If you did not create a Sefask account, you can safely ignore this email.\n"
)


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str


def render_verification_email(
    first_name: str, code: str, ttl: timedelta = VERIFICATION_CODE_TTL,
) -> RenderedEmail:
    minutes = int(ttl.total_seconds() // 60)
    return RenderedEmail(
        subject=VERIFICATION_SUBJECT,
        html=_HTML_TEMPLATE.format(
            first_name=escape(first_name), code=escape(code), minutes=minutes,
        ),
        text=_TEXT_TEMPLATE.format(
            first_name=first_name, code=code, minutes=minutes,
        ),
    )
