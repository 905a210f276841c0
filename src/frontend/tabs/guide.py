"""Guide tab with a short description of how offloading works."""

from __future__ import annotations

from textual.containers import Container
from textual.widgets import Static

GUIDE_TEXT = """\
Channel messages from local users that are longer than cutofflen are
uploaded to the paste service as an unlisted paste that never expires.

The channel then sees the first sniplen characters followed by
"... (more <link> )".

If the upload fails the message is sent unchanged and a warning is logged.
Direct messages and messages relayed from other servers are never touched.

Run `largetextpaste check` after saving to validate the config, and send
SIGHUP to a running `largetextpaste run` to reload it.
"""


class GuideTab(Container):
    def compose(self):
        yield Static(GUIDE_TEXT, classes="guide")
