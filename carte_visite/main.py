import io
import logging
import os

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse, Response, StreamingResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from carte_visite.config import STATIC_DIR, TEMPLATES_DIR, config
from carte_visite.errors import CaptureTargetMissingError, ExportError
from carte_visite.export import ExportedFile, export_pdf, export_png
from carte_visite.models import Stage
from carte_visite.rendering import DisplayMode, render_card
from carte_visite.state import CardStore, EditRequested, FieldEdited, Submitted, constraint_violations

logging.basicConfig(
    level=config.CARD_LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Générateur de Cartes de Visite FNM")
app.state.store = CardStore()

# Static files
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def _store(request: Request) -> CardStore:
    return request.app.state.store


def _download(exported: ExportedFile) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(exported.content),
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    state = _store(request).snapshot()
    if state.stage is Stage.PREVIEW:
        view = render_card(state.card, DisplayMode.PREVIEW)
        return templates.TemplateResponse(request, "preview.html", {"card": state.card, "view": view})
    return templates.TemplateResponse(request, "form.html", {"card": state.card, "invalid": []})


@app.get("/logo")
def logo():
    if not os.path.exists(config.CARD_LOGO_PATH):
        raise HTTPException(status_code=404, detail="Logo not found")
    return FileResponse(config.CARD_LOGO_PATH)


# -------- Form stage --------
@app.post("/card", response_class=HTMLResponse)
async def submit_card(
    request: Request,
    name: str = Form(""),
    position: str = Form(""),
    phone: str = Form(""),
):
    store = _store(request)
    # A form posted from a stale tab while in preview still replaces the card
    store.dispatch(EditRequested())
    for field, value in (("name", name), ("position", position), ("phone", phone)):
        store.dispatch(FieldEdited(field, value))
    state = store.dispatch(Submitted())

    if state.stage is Stage.PREVIEW:
        return RedirectResponse("/", status_code=303)
    # The browser blocks this submission natively; only reached when constraints are bypassed
    return templates.TemplateResponse(
        request,
        "form.html",
        {"card": state.card, "invalid": constraint_violations(state.card)},
        status_code=422,
    )


@app.post("/edit")
async def edit_card(request: Request):
    _store(request).dispatch(EditRequested())
    return RedirectResponse("/", status_code=303)


# -------- Export endpoints --------
@app.get("/download/png")
def download_png(request: Request):
    try:
        exported = export_png(_store(request).snapshot())
    except CaptureTargetMissingError:
        logger.debug("PNG download requested without a rendered card")
        return Response(status_code=204)
    except ExportError as e:
        logger.exception("Error generating PNG")
        raise HTTPException(status_code=500, detail=f"Failed to generate card: {str(e)}")
    return _download(exported)


@app.get("/download/pdf")
def download_pdf(request: Request):
    try:
        exported = export_pdf(_store(request).snapshot())
    except CaptureTargetMissingError:
        logger.debug("PDF download requested without a rendered card")
        return Response(status_code=204)
    except ExportError as e:
        logger.exception("Error generating PDF")
        raise HTTPException(status_code=500, detail=f"Failed to generate card: {str(e)}")
    return _download(exported)


def run():
    import uvicorn

    uvicorn.run(app, host=config.CARD_HOST, port=config.CARD_PORT)


if __name__ == "__main__":
    run()
