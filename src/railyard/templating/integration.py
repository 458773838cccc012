"""Kida environment binding for routing helpers.

Path helpers are request-independent and are installed once as kida
globals. URL helpers need the in-flight request, so they travel in the
render context built per request by ``template_context``::

    env = create_environment(router.helpers, autoescape=True)
    tpl = env.from_string('<a href="{{ band_url(band) }}">{{ band_path(band) }}</a>')
    html = tpl.render(template_context(router.helpers, request, band=band))

Requires the ``templates`` extra (``pip install railyard[templates]``).
"""

from typing import Any

from kida import Environment

from railyard.routing.helpers import HelperRegistry


def install_helpers(env: Environment, helpers: HelperRegistry) -> Environment:
    """Register every path helper, plus ``path_for``, as a kida global."""
    for name, func in helpers.paths.items():
        env.add_global(name, func)
    env.add_global("path_for", helpers.path_for)
    return env


def create_environment(helpers: HelperRegistry, **options: Any) -> Environment:
    """Create a kida Environment with the routing helpers installed.

    *options* are passed through to ``kida.Environment``.
    """
    return install_helpers(Environment(**options), helpers)


def template_context(
    helpers: HelperRegistry,
    request: Any,
    response: Any = None,
    **context: Any,
) -> dict[str, Any]:
    """Render context with every helper bound to *request*.

    Caller-supplied *context* wins over helper names.
    """
    return {**helpers.bind(request, response), **context}
