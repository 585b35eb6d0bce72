"""HTTP front end: request validation and JSON in/out around calculate_bond."""
from __future__ import annotations

import logging
from typing import List, Literal

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from . import __version__
from .bonds import MESSAGES, BondInput, InvalidBondInput
from .config import settings
from .engine import BondCalculator

logger = logging.getLogger(__name__)

EXAMPLE_REQUEST = {
    "faceValue": 1000,
    "annualCouponRate": 5,
    "marketPrice": 950,
    "yearsToMaturity": 10,
    "couponFrequency": 2,
}


class CalculateBondRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="forbid",
        json_schema_extra={"example": EXAMPLE_REQUEST},
    )

    face_value: float = Field(..., gt=0, strict=True, description="Par amount repaid at maturity")
    annual_coupon_rate: float = Field(..., ge=0, le=100, strict=True, description="Annual coupon rate in percent")
    market_price: float = Field(..., gt=0, strict=True, description="Current trading price")
    years_to_maturity: float = Field(..., gt=0, le=100, strict=True, description="Years until maturity")
    coupon_frequency: Literal[1, 2] = Field(..., description="1 = annual, 2 = semi-annual")

    def to_bond(self) -> BondInput:
        return BondInput(
            face_value=self.face_value,
            annual_coupon_rate=self.annual_coupon_rate,
            market_price=self.market_price,
            years_to_maturity=self.years_to_maturity,
            coupon_frequency=self.coupon_frequency,
        )


REQUEST_FIELDS = {f.alias: name for name, f in CalculateBondRequest.model_fields.items()}

# pydantic error type -> rule key in MESSAGES; anything else reads as "not a number"
ERROR_RULES = {
    "greater_than": "positive",
    "greater_than_equal": "negative",
    "less_than_equal": "max",
    "literal_error": "choice",
}


def error_message(err: dict) -> str:
    """Translate one pydantic error into the user-facing validation message."""
    loc = err.get("loc") or ()
    name = loc[-1] if loc else None
    if err["type"] == "extra_forbidden":
        return f"property {name} should not exist"

    field = REQUEST_FIELDS.get(name)
    if field is None:
        return err["msg"]
    rule = ERROR_RULES.get(err["type"], "number")
    return MESSAGES.get((field, rule), MESSAGES.get((field, "choice"), err["msg"]))


def bad_request(messages: List[str]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"statusCode": 400, "message": messages, "error": "Bad Request"},
    )


calculator = BondCalculator()

app = FastAPI(
    title="Bond Yield Calculator API",
    description="Yield to maturity, current yield and coupon schedule for fixed-coupon bonds",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    messages = [error_message(err) for err in exc.errors()]
    return bad_request(list(dict.fromkeys(messages)))


@app.get("/")
def info():
    return {
        "name": "Bond Yield Calculator API",
        "version": __version__,
        "endpoints": {
            "POST /calculate": "Calculate bond yields and cash flow schedule",
        },
        "example": EXAMPLE_REQUEST,
    }


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/calculate")
def calculate(req: CalculateBondRequest):
    try:
        result = calculator.calculate(req.to_bond())
    except InvalidBondInput as e:
        return bad_request([e.message])
    return result.to_dict()


def main() -> None:
    import uvicorn

    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Bond Yield Calculator API on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
