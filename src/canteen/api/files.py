from fastapi import HTTPException, UploadFile


async def read_upload(upload: UploadFile, max_bytes: int) -> bytes:
    """
    Читает файл в память целиком. Больше max_bytes: отказ, а не обрезка.
    """
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large (max {max_bytes // (1024 * 1024)}MB)",
        )
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    return data
