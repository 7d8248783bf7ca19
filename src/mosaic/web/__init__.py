"""Page-level plumbing: URL parameters, share links and the session."""

from __future__ import annotations
