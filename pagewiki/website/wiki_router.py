from functools import wraps

from flask import Blueprint, abort, redirect, request, url_for

from pagewiki.routing.path_validator import Action, parse_path
from pagewiki.storage.page_store import Page, PageStoreError, PageNotFoundError
from pagewiki.website.forms.edit_page import EditPageForm

# Every method reaches the dispatcher so that invalid paths are always a 404
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ALLOWED_METHODS = {
    Action.VIEW: ["GET", "HEAD"],
    Action.EDIT: ["GET", "HEAD"],
    Action.SAVE: ["POST"],
}


class WikiHandlers:
    """
    View, edit and save logic for a single page title.
    Titles arrive already validated by the dispatcher and are used as-is.
    """

    def __init__(self, store, renderer, log):
        self.store = store
        self.renderer = renderer
        self.log = log

    def view(self, title):
        try:
            page = self.store.load(title)
        except PageStoreError as e:
            self._log_load_failure(title, e)
            return redirect(url_for("wiki.edit_page", subpath=title))
        return self.renderer.render("view", page)

    def edit(self, title):
        try:
            page = self.store.load(title)
        except PageStoreError as e:
            self._log_load_failure(title, e)
            page = Page(title=title)
        form = EditPageForm(data={"body": page.text})
        return self.renderer.render("edit", page, form=form)

    def save(self, title):
        # Posted form field first, then the query string; JSON bodies are not read
        body = request.form.get("body", request.args.get("body", ""))
        page = Page(title=title, body=body.encode("utf-8"))
        try:
            self.store.save(page)
        except PageStoreError as e:
            self.log.error(f"Error saving page {title}: {e}")
            return str(e), 500, {"Content-Type": "text/plain; charset=utf-8"}
        self.log.info(f"Saved page {title} ({len(page.body)} bytes)")
        return redirect(url_for("wiki.view_page", subpath=title))

    def _log_load_failure(self, title, error):
        if isinstance(error, PageNotFoundError):
            self.log.debug(f"Page {title} not found, treating as new page")
        else:
            self.log.warning(f"Error loading page {title}, treating as new page: {error}")


def make_handler(action, handler):
    """
    Wrap a handler so it only runs for paths that parse as /<action>/<title>.
    Anything else is a 404 and the handler (and so the page store) is never reached.
    """

    @wraps(handler)
    def dispatch(subpath=""):
        wiki_path = parse_path(request.path)
        if wiki_path is None or wiki_path.action is not action:
            abort(404)
        if request.method not in ALLOWED_METHODS[action]:
            abort(405, valid_methods=ALLOWED_METHODS[action])
        return handler(wiki_path.title)

    return dispatch


def set_routes(blueprint, handlers):
    routes = [
        (Action.VIEW, handlers.view),
        (Action.EDIT, handlers.edit),
        (Action.SAVE, handlers.save),
    ]
    for action, handler in routes:
        endpoint = f"{action.value}_page"
        view_func = make_handler(action, handler)
        rule_options = {
            "endpoint": endpoint,
            "view_func": view_func,
            "methods": ROUTE_METHODS,
            "strict_slashes": False,
            "provide_automatic_options": False,
        }
        blueprint.add_url_rule(f"/{action.value}/", defaults={"subpath": ""}, **rule_options)
        blueprint.add_url_rule(f"/{action.value}/<path:subpath>", **rule_options)


def create_wiki_route(store, renderer, log):
    """
    Build the wiki blueprint with its store and renderer bound in.
    Args:
        store (PageStore): Where pages are loaded from and saved to.
        renderer (PageRenderer): Compiled view/edit templates.
        log (logging.Logger): Logger used by the handlers.
    Returns:
        Blueprint: The "wiki" blueprint, ready to register on an app.
    """
    wiki_route = Blueprint("wiki", __name__)
    set_routes(wiki_route, WikiHandlers(store, renderer, log))
    return wiki_route
