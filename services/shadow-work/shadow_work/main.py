from fastapi import FastAPI

from .routers.program import router as program_router

app = FastAPI(title="Shadow Work Service", version="0.1.0")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(program_router)
