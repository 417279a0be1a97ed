import bleach
import logging
from markdown import markdown

ALLOWED_HTML_TAGS = [
    'p', 'br', 'hr', 'strong', 'em', 'blockquote',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'ul', 'ol', 'li', 'a', 'code', 'pre', 'img',
    'table', 'thead', 'tbody', 'tr', 'th', 'td',
]
ALLOWED_PROTOCOLS = ['http', 'https', 'mailto']

MARKDOWN_EXTENSIONS = ['fenced_code', 'tables']


def _attribute_filter(tag, name, value):
    """
    Attribute filter for bleach.clean()

    Args:
        tag: HTML tag name (e.g., 'a', 'img')
        name: attribute name (e.g., 'href', 'src')
        value: attribute value
    Returns:
        True to keep the attribute, False to remove it
    """
    if name in ['class', 'id']:
        return True

    if tag == 'a' and name in ['href', 'title']:
        return True

    if tag == 'img' and name in ['src', 'alt', 'title']:
        return True

    return False


def clean_html_content(html_content: str, context: str = None) -> str:
    """
    Clean HTML content by removing disallowed tags and attributes.
    """
    try:
        return bleach.clean(
            html_content,
            tags=ALLOWED_HTML_TAGS,
            attributes=_attribute_filter,
            protocols=ALLOWED_PROTOCOLS,
            strip=True  # drop disallowed tags instead of escaping them
        )
    except Exception as e:
        context_str = f" Context: {context}" if context else ""
        logging.error(f"Error cleaning HTML content: {e}. Input snippet: {html_content[:100]}...{context_str}")
        return ""


def render_markdown(text: str, context: str = None) -> str:
    """Render markdown to sanitized HTML"""
    html = markdown(text or '', extensions=MARKDOWN_EXTENSIONS)
    return clean_html_content(html, context=context)
