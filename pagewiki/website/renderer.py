from flask import render_template
from jinja2 import TemplateError

from pagewiki.config import TEMPLATE_NAMES


class PageRenderer:
    """
    Holds the compiled page templates for the lifetime of the app.
    All templates are loaded when the renderer is built, so a missing or broken
    template (jinja2.TemplateNotFound / TemplateSyntaxError) stops startup
    instead of surfacing on the first request.
    """

    def __init__(self, app, template_names=TEMPLATE_NAMES):
        self.log = app.logger
        self.templates = {}
        for name in template_names:
            self.templates[name] = app.jinja_env.get_template(f"{name}.html")
            self.log.debug(f"Loaded template {name}.html")

    def render(self, name, page, **context):
        """
        Render a page template into a response.
        Args:
            name (str): Logical template name, "view" or "edit".
            page (Page): The page exposed to the template as `page`.
        Returns:
            tuple: (body, status, headers) ready to return from a view function.
                Rendering failures give a 500 whose body is the error message.
        """
        template = self.templates[name]
        try:
            html = render_template(template, page=page, **context)
        except TemplateError as e:
            self.log.error(f"Error rendering {name} for {page.title}: {e}")
            return str(e), 500, {"Content-Type": "text/plain; charset=utf-8"}
        return html, 200, {"Content-Type": "text/html; charset=utf-8"}
