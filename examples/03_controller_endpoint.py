"""
Controller endpoint example of fastapi-request-binder.

Demonstrates:
- One controller class serving GET/POST/DELETE on a route
- `action` as the fallback handler for other verbs
- Receiving the RequestData through a `request` attribute
"""

from fastapi import FastAPI

from fastapi_request_binder import RequestData, controller_endpoint

app = FastAPI(title="Controller Endpoint Example")

NOTES: dict[int, str] = {}


class NoteController:
    request: RequestData
    id: int
    text: str | None

    def get(self):
        return {"id": self.id, "text": NOTES.get(self.id)}

    def post(self):
        NOTES[self.id] = self.text or ""
        return {"id": self.id, "text": NOTES[self.id]}

    def delete(self):
        NOTES.pop(self.id, None)
        return {"deleted": self.id}


app.add_route(
    "/notes/{id}",
    controller_endpoint(NoteController, debug=True),
    methods=["GET", "POST", "DELETE"],
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
