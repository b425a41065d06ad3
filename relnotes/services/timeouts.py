from __future__ import annotations

# gh read/write API calls (release view/create/edit)
GH_TIMEOUT_SECONDS = 60.0

# gh release upload (large installers over slow links)
GH_UPLOAD_TIMEOUT_SECONDS = 30 * 60.0
