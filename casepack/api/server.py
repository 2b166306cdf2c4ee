import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from casepack.config import get_settings, configure_logging
from casepack.logic.exceptions import CasepackError
from casepack.logic.optimizer import CasepackOptimizer
from casepack.reporting.excel_report import report_bytes, XLSX_MEDIA_TYPE
from casepack.api.schemas import OptimizeRequest, OptimizeResponse, ErrorResponse

settings = get_settings()

# Configure Logging
configure_logging(settings)
logger = logging.getLogger("CasepackAPI")

app = FastAPI(title="Casepack Optimizer API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

optimizer = CasepackOptimizer()


@app.exception_handler(CasepackError)
async def casepack_error_handler(request: Request, exc: CasepackError):
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    body = ErrorResponse(detail=str(exc), error=type(exc).__name__)
    return JSONResponse(status_code=400, content=body.model_dump())


def run_optimizer(payload: OptimizeRequest):
    return optimizer.optimize(
        payload.domain_case_packs(),
        payload.need_per_store,
        payload.warehouse_available_qty,
    )


@app.get("/")
def read_root():
    return {"status": "Casepack Optimizer backend is running"}


@app.post("/api/v1/casepack/optimize", response_model=OptimizeResponse, responses={400: {"model": ErrorResponse}})
def optimize_casepacks(payload: OptimizeRequest):
    result = run_optimizer(payload)
    logger.info(
        f"Optimization complete. {result.total_allocated} casepacks allocated, "
        f"{result.remaining_supply} remaining."
    )
    return OptimizeResponse.from_result(result)


@app.post("/api/v1/casepack/report", responses={400: {"model": ErrorResponse}})
def download_report(payload: OptimizeRequest):
    result = run_optimizer(payload)
    filename = "casepack_allocation.xlsx"
    return Response(
        content=report_bytes(result),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
