from fastapi.responses import JSONResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    """모든 오류 응답은 { errorMessage } 형태"""
    return JSONResponse(status_code=status_code, content={"errorMessage": message})
