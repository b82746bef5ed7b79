from typing import Any


def success_response(data: Any = None, message: str | None = None) -> dict:
    return {"status": "success", "data": data, "message": message}


def error_response(message: str, data: Any = None) -> dict:
    return {"status": "error", "data": data, "message": message}


def page_response(items: list, total: int, page: int, page_size: int) -> dict:
    return success_response(data={
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
    })
