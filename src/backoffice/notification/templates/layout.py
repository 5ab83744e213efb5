"""Shared HTML shell for outgoing emails."""

from html import escape

_BRAND = "Insophinia"

_SHELL = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>
    body {{ font-family: 'Roboto', Helvetica, Arial, sans-serif; background-color: #f0f2f5; color: #333333; margin: 0; padding: 0; }}
    .email-container {{ max-width: 600px; margin: 20px auto; background-color: #ffffff; border-radius: 12px; overflow: hidden; border: 1px solid #dee2e6; }}
    .header {{ background-color: #0D47A1; color: #ffffff; padding: 30px 20px; text-align: center; }}
    .header h1 {{ margin: 0; font-size: 28px; letter-spacing: 1px; }}
    .content {{ padding: 30px; line-height: 1.7; font-size: 16px; color: #495057; }}
    .content strong {{ color: #0D47A1; }}
    .footer {{ background-color: #f8f9fa; color: #6c757d; padding: 20px; text-align: center; font-size: 12px; }}
  </style>
</head>
<body>
  <div class="email-container">
    <div class="header"><h1>{brand}</h1></div>
    <div class="content">
      <h2>{title}</h2>
      {content}
    </div>
    <div class="footer">&copy; {brand}. This is an automated message.</div>
  </div>
</body>
</html>
"""


def render_email_html(subject: str, content_html: str) -> str:
    """Wrap an HTML fragment in the branded email layout.

    ``content_html`` is inserted as-is; callers escape any user-supplied
    values they interpolate into it.
    """
    return _SHELL.format(title=escape(subject), brand=_BRAND, content=content_html)
