#!/usr/bin/env python3
"""
contracheck FastAPI Server
Provides REST API for contract parsing and checking
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from contracheck import __version__
from contracheck.core.config import Settings
from contracheck.core.errors import ContractParseError
from contracheck.server.client import ContractClient
from contracheck.verify import CheckSummary

logger = logging.getLogger(__name__)


# ============================================================================
# Request/Response Models
# ============================================================================

class ParseContractRequest(BaseModel):
    contract: str


class ParseContractResponse(BaseModel):
    valid: bool
    clauses: List[str] = []
    error: Optional[str] = None
    span: Optional[List[int]] = None
    clause_index: Optional[int] = None


class CheckContractRequest(BaseModel):
    function_source: str
    contract: str
    mutates: str = ""
    pure: bool = False
    receiver: Optional[str] = None
    inferred_not_null: List[str] = []


class CheckContractResponse(BaseModel):
    success: bool
    function_name: Optional[str] = None
    clauses: List[str] = []
    diagnostics: List[dict] = []
    tracking_abandoned_at: Optional[int] = None
    error: Optional[str] = None


class CheckSourceRequest(BaseModel):
    source: str
    filename: str = "<string>"


class CheckFileRequest(BaseModel):
    file_path: str


class CheckSummaryResponse(BaseModel):
    success: bool
    result: Optional[dict] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    max_tracked_regions: int


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="contracheck API",
    description="Validation of declarative function contracts",
    version=__version__
)

# Enable CORS for editor integrations
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global client instance
contract_client: Optional[ContractClient] = None


def get_contract_client() -> ContractClient:
    """Get or create the contract client instance"""
    global contract_client
    if contract_client is None:
        contract_client = ContractClient(Settings.from_env())
    return contract_client


def summary_to_dict(summary: CheckSummary) -> Dict:
    return {
        "filename": summary.filename,
        "load_error": summary.load_error,
        "total": summary.total,
        "clean": summary.clean,
        "with_errors": summary.with_errors,
        "results": [
            {
                "name": r.name,
                "line": r.lineno,
                "contract": r.contract,
                "ok": r.ok,
                "diagnostics": [d.to_dict() for d in r.diagnostics],
                "tracking_abandoned_at": r.tracking_abandoned_at,
                "duration": r.duration
            }
            for r in summary.results
        ]
    }


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": __version__,
        "max_tracked_regions": get_contract_client().settings.max_tracked_regions
    }


@app.post("/api/parse-contract", response_model=ParseContractResponse)
async def parse_contract(request: ParseContractRequest):
    """
    Parse contract text into clauses.

    Example:
        POST /api/parse-contract
        {"contract": "null -> fail; _ -> !null"}
    """
    try:
        clauses = get_contract_client().parse_contract(request.contract)
    except ContractParseError as e:
        return {
            "valid": False,
            "error": e.message,
            "span": [e.span.start, e.span.end],
            "clause_index": e.clause_index
        }

    return {
        "valid": True,
        "clauses": [str(c) for c in clauses]
    }


@app.post("/api/check-contract", response_model=CheckContractResponse)
async def check_contract(request: CheckContractRequest):
    """
    Check a contract against a function signature.

    Example:
        POST /api/check-contract
        {
            "function_source": "def f(x: Optional[str]) -> bool: ...",
            "contract": "null -> fail; _ -> true"
        }
    """
    try:
        result = get_contract_client().check_function_source(
            function_source=request.function_source,
            contract=request.contract,
            mutates=request.mutates,
            pure=request.pure,
            receiver=request.receiver,
            inferred_not_null=request.inferred_not_null
        )
    except (SyntaxError, ValueError) as e:
        return {
            "success": False,
            "error": f"{type(e).__name__}: {e}"
        }

    return {
        "success": True,
        "function_name": result.function_name,
        "clauses": [str(c) for c in result.clauses],
        "diagnostics": [d.to_dict() for d in result.diagnostics],
        "tracking_abandoned_at": result.tracking_abandoned_at
    }


@app.post("/api/check-source", response_model=CheckSummaryResponse)
async def check_source(request: CheckSourceRequest):
    """
    Check every @contract function in posted source code.

    Example:
        POST /api/check-source
        {"source": "@contract('null -> fail')\\ndef f(x): ...", "filename": "f.py"}
    """
    summary = get_contract_client().check_source(request.source, request.filename)
    if summary.load_error:
        return {
            "success": False,
            "error": summary.load_error
        }
    return {
        "success": True,
        "result": summary_to_dict(summary)
    }


@app.post("/api/check-file", response_model=CheckSummaryResponse)
async def check_file(request: CheckFileRequest):
    """
    Check every @contract function in a file on the server.

    Example:
        POST /api/check-file
        {"file_path": "/path/to/file.py"}
    """
    if not Path(request.file_path).is_file():
        raise HTTPException(status_code=404, detail="File not found")

    summary = get_contract_client().check_file(request.file_path)
    if summary.load_error:
        return {
            "success": False,
            "error": summary.load_error
        }
    return {
        "success": True,
        "result": summary_to_dict(summary)
    }


# ============================================================================
# Run Server
# ============================================================================

def run(host: Optional[str] = None, port: Optional[int] = None):
    """Serve the API with uvicorn"""
    import uvicorn

    settings = get_contract_client().settings
    host = host or settings.host
    port = port or settings.port
    logger.info("Starting contracheck API on http://%s:%d (docs at /docs)", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
