"""
File upload example of fastapi-request-binder.

Demonstrates:
- Binding a single uploaded file to an UploadedFile field
- Binding repeated file parts to list[UploadedFile]
- 422 responses for values that cannot be converted
"""

from fastapi import Depends, FastAPI

from fastapi_request_binder import UploadedFile, bind_dependency

app = FastAPI(title="File Upload Example")


class CreateAlbum:
    title: str
    cover: UploadedFile
    photos: list[UploadedFile] = []
    public: bool = False


@app.post("/albums")
async def create_album(album: CreateAlbum = Depends(bind_dependency(CreateAlbum))):
    """Try: curl -F title=Trip -F cover=@a.png -F photos=@b.jpg -F photos=@c.jpg"""
    return {
        "title": album.title,
        "cover": {"name": album.cover.name, "size": album.cover.size},
        "photos": [p.name for p in album.photos],
        "public": album.public,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
