"""Non-JSON responses built from gateway payloads.

Called by: routes/customer.py, routes/admin.py
"""

from __future__ import annotations

from typing import Any

from fastapi import Response


def document_file_response(document: dict[str, Any], *, inline: bool = False) -> Response:
    """Stream a KYC document returned by a download/view operation."""
    disposition = "inline" if inline else "attachment"
    return Response(
        content=document["content"],
        media_type=document.get("contentType") or "application/octet-stream",
        headers={"Content-Disposition": f'{disposition}; filename="{document["filename"]}"'},
    )
