import markdown
from markupsafe import Markup

MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "toc"]


def wikify(text, render_markdown=False):
    """
    Prepare page text for the view template.
    Plain text is returned untouched and left to Jinja autoescaping. When
    render_markdown is set the text is converted with Python-Markdown and
    marked safe, raw HTML in the page included.
    """
    if not render_markdown:
        return text
    return Markup(markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS))
