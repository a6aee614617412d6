import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from insite_codec.config import load_settings
from insite_codec.routers import codec

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="InSite 4.0 codec")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(codec.router)


@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("insite_codec.main:app", host=settings.host, port=settings.port, reload=settings.reload)
