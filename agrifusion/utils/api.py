# --- agrifusion/utils/api.py ---

def api_ok(message, data=None):
    return {
        "success": True,
        "message": message,
        "data": data or {},
    }


def api_error(message, details=None):
    body = {"error": message}
    if details:
        body["details"] = details
    return body
