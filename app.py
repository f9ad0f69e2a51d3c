# -*- coding: utf-8 -*-
import logging
from decimal import Decimal
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from config import settings
# Importar pricing module
from pricing import (
    FeeModelRegistry,
    PricingValidationError,
    ProductCostBasis,
    UnknownChannelType,
    aggregate,
    ensure_valid,
    evaluate,
    fingerprint,
    format_report,
    parse_channel_config,
    sort_calculations,
)
from pricing.formatter import format_calculation

logging.basicConfig(
    level=logging.DEBUG if settings.dev_mode else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Channel Pricing API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# PRICING ENDPOINTS
# ============================================================================

class CostBasisIn(BaseModel):
    """Custo do produto"""
    base_cost: Decimal = Field(..., description="Custo unitário do produto")
    tax_percent: Decimal = Field(Decimal("0"), description="Imposto sobre o custo (0 a 100)")


class EvaluateRequest(BaseModel):
    """Request para avaliação de um canal"""
    cost_basis: CostBasisIn
    channel: Dict[str, Any] = Field(..., description="Configuração do canal (com channel_type)")


class PortfolioRequest(BaseModel):
    """Request para avaliação de todos os canais de um produto"""
    cost_basis: CostBasisIn
    channels: List[Dict[str, Any]] = Field(default_factory=list)
    sort_by: str = Field("margin", description="margin | profit | roi")


def _parse_request(cost_basis_in: CostBasisIn, channels: List[Dict[str, Any]]):
    """Converte e valida entradas; erros viram HTTP 422"""
    cost_basis = ProductCostBasis(**cost_basis_in.model_dump())

    try:
        configs = [parse_channel_config(channel) for channel in channels]
        ensure_valid(cost_basis, configs)
    except UnknownChannelType as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "supported_channels": FeeModelRegistry.get_supported_channels()
            }
        )
    except PricingValidationError as e:
        logger.warning(f"Entrada de precificação inválida: {e}")
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]}
        )

    return cost_basis, configs


@app.get("/pricing/channels")
async def pricing_channels():
    """
    Lista canais suportados e os campos de taxa de cada um.
    """
    return {
        "supported_channels": FeeModelRegistry.get_supported_channels(),
        "channels": FeeModelRegistry.describe()
    }


@app.post("/pricing/validate")
async def pricing_validate(request: PortfolioRequest):
    """
    Valida entradas de precificação.

    Returns:
        200: Válido
        422: Inválido (com mensagens de erro)
    """
    _parse_request(request.cost_basis, request.channels)
    return {"valid": True, "message": "Entrada válida"}


@app.post("/pricing/evaluate")
async def pricing_evaluate(request: EvaluateRequest):
    """
    Calcula lucro líquido, margem e ROI de um único canal.

    Raises:
        422: Canal não suportado ou valores fora de faixa
    """
    cost_basis, configs = _parse_request(request.cost_basis, [request.channel])
    calculation = evaluate(cost_basis, configs[0])

    return {
        "calculation": calculation.model_dump(mode="json"),
        "formatted": format_calculation(calculation).model_dump()
    }


@app.post("/pricing/portfolio")
async def pricing_portfolio(request: PortfolioRequest):
    """
    Avalia todos os canais ativos do produto e retorna o resumo do portfólio.

    Raises:
        422: Canal não suportado, critério de ordenação inválido ou valores fora de faixa
    """
    cost_basis, configs = _parse_request(request.cost_basis, request.channels)
    calculations, summary = aggregate(cost_basis, configs)

    try:
        ordered = sort_calculations(calculations, request.sort_by)
    except ValueError as e:
        raise HTTPException(status_code=422, detail={"message": str(e)})

    return {
        "fingerprint": fingerprint(cost_basis, configs),
        "report": format_report(ordered, summary).model_dump(),
        "summary": summary.model_dump(mode="json")
    }


@app.get("/gateway_info", tags=["gateway"], summary="Informações do serviço")
async def gateway_info():
    return {
        "name": "Channel Pricing",
        "slug": settings.app_slug,
        "description": "Calculadora de lucratividade por canal de venda",
    }


# ========= MAIN PARA RODAR DEBUGANDO =========


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="127.0.0.1", port=5002, reload=True)
