import logging
from typing import Optional
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app import config
from app.errors import InvalidInput
from app.pipeline import SearchPipeline
from app.schemas import ParseRequest

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("main")

app = FastAPI(title="Property Query Parser", version="0.1.0")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

_pipeline: SearchPipeline | None = None


def get_pipeline() -> SearchPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = SearchPipeline()
    return _pipeline


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/parse-properties")
async def parse_properties(req: Optional[ParseRequest] = None, pipeline: SearchPipeline = Depends(get_pipeline)):
    text = req.post if req else None
    logger.info(f"[API] parse properties request: {text!r}")
    listings = await pipeline.process_search(text)
    logger.info(f"[API] sending {len(listings)} listings, first: {listings[0] if listings else 'no items'}")
    return listings


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"error": str(exc)})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
