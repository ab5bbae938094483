"""Page objects.

A Page represents one screen of the application under test: where it lives,
the shortcuts that make selectors readable, and a check that the browser is
really on it.
"""

from typing import Dict, Optional

from .binding import Binding


class Page(Binding):
    """Base class for page objects.

    Override url() so visit(page) can navigate, elements() for page-specific
    shortcuts, and verify() to assert the browser is on the page. A project
    usually defines site-wide shortcuts once on its own base page by
    overriding site_elements().
    """

    def url(self) -> Optional[str]:
        """URL of the page, absolute or relative to the configured base URL."""
        return None

    @classmethod
    def site_elements(cls) -> Dict[str, str]:
        """Shortcuts available on every page."""
        return {}

    def all_elements(self) -> Dict[str, str]:
        """Site elements overlaid with page elements (page elements win)."""
        return {**self.site_elements(), **self.elements()}
