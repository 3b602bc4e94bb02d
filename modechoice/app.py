"""
app.py — modechoice: Travel-Mode Decision API

The decision pipeline, exposed over HTTP:
  Stage 1: Framework    — build the attack graph for the context
  Stage 2: Semantics    — grounded, complete, preferred, stable extensions
  Stage 3: Aggregation  — SCR per mode, prior, normalized percentages

Usage:
  python -m modechoice.app
  curl -X POST localhost:8788/v1/decide \
       -H 'Content-Type: application/json' \
       -d '{"distance": 12, "weather": "Rainy", "is_rush_hour": true}'
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from modechoice import __version__
from modechoice.agent import TravelAgent
from modechoice.argumentation import ArgumentationEngine, FrameworkBuilder
from modechoice.decision import DEFAULT_MODE_MAP, DecisionAggregator, Polarity
from modechoice.models import (
    Acceptance,
    ArgumentView,
    AttackView,
    Context,
    DecisionResult,
    FrameworkResponse,
    HealthComponent,
    HealthResponse,
    Mode,
    ModeInfo,
)

# ── Logging ──────────────────────────────────────────────────────

logging.basicConfig(
    level=os.environ.get("MODECHOICE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s │ %(name)-24s │ %(levelname)-7s │ %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("modechoice.server")

# ── Configuration ────────────────────────────────────────────────

SEARCH_LIMIT = int(os.environ.get("MODECHOICE_SEARCH_LIMIT", "100000"))
PARALLEL = os.environ.get("MODECHOICE_PARALLEL", "true").lower() in ("1", "true", "yes")
ACCEPTANCE = Acceptance(os.environ.get("MODECHOICE_ACCEPTANCE", Acceptance.CANONICAL.value))
HOST = os.environ.get("MODECHOICE_HOST", "0.0.0.0")
PORT = int(os.environ.get("MODECHOICE_PORT", "8788"))
SERVER_START_TIME = time.time()

# ── Agent ────────────────────────────────────────────────────────

agent = TravelAgent(
    builder=FrameworkBuilder(),
    engine=ArgumentationEngine(search_limit=SEARCH_LIMIT, parallel=PARALLEL),
    aggregator=DecisionAggregator(acceptance=ACCEPTANCE),
    mode_map=DEFAULT_MODE_MAP,
)


# ── App Lifecycle ────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("=" * 60)
    log.info("  modechoice — Travel-Mode Decision API")
    log.info(f"  Version:      {__version__}")
    log.info(f"  Acceptance:   {ACCEPTANCE.value}")
    log.info(f"  Search limit: {SEARCH_LIMIT}")
    log.info(f"  Parallel:     {PARALLEL}")
    log.info("=" * 60)

    yield

    log.info("modechoice server stopped.")


# ── FastAPI App ──────────────────────────────────────────────────

app = FastAPI(
    title="modechoice API",
    description="Travel-mode selection by abstract argumentation.",
    version=__version__,
    lifespan=lifespan,
)


# ═════════════════════════════════════════════════════════════════
#  ENDPOINTS
# ═════════════════════════════════════════════════════════════════


# ── Health ───────────────────────────────────────────────────────

@app.get("/v1/health", response_model=HealthResponse, tags=["System"])
async def health():
    components = {
        "engine": HealthComponent(
            status="ok",
            detail=f"search limit {agent.engine.search_limit}, "
                   f"{'parallel' if agent.engine.parallel else 'sequential'}",
        ),
        "builder": HealthComponent(
            status="ok",
            detail=f"{len(agent.builder.core_attacks)} core attacks, "
                   f"{len(agent.builder.conditional_attacks)} conditions",
        ),
    }
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=int(time.time() - SERVER_START_TIME),
        components=components,
    )


# ── Decide (The Main Pipeline) ──────────────────────────────────

@app.post("/v1/decide", response_model=DecisionResult, tags=["Decision"])
def decide(context: Context):
    """Build, reason, aggregate. Invalid contexts are rejected with 422."""
    log.info(
        f"Decide | distance={context.distance:.1f} weather={context.weather.value} "
        f"healthy={context.is_healthy} rush={context.is_rush_hour}"
    )
    return agent.decide(context)


# ── Framework Export ─────────────────────────────────────────────

@app.post("/v1/framework", response_model=FrameworkResponse, tags=["Decision"])
def framework(context: Context):
    """Attack graph for the context, with grounded acceptance per node."""
    af = agent.build_framework(context)
    grounded = agent.engine.grounded_extension(af)
    exported = af.to_dict(accepted=grounded.arguments, annotate=agent.mode_map.annotate)
    return FrameworkResponse(
        context=context,
        arguments=[ArgumentView(**node) for node in exported["arguments"]],
        attacks=[AttackView(**edge) for edge in exported["attacks"]],
        stats=exported["stats"],
    )


# ── Modes ────────────────────────────────────────────────────────

@app.get("/v1/modes", tags=["Decision"])
async def list_modes():
    modes = [
        ModeInfo(
            mode=mode,
            prior=agent.aggregator.priors[mode],
            pro_arguments=agent.mode_map.arguments_for(mode, Polarity.PRO),
            con_arguments=agent.mode_map.arguments_for(mode, Polarity.CON),
        )
        for mode in Mode
    ]
    return {"modes": modes}


# ── Entrypoint ───────────────────────────────────────────────────

def main():
    uvicorn.run(
        "modechoice.app:app",
        host=HOST,
        port=PORT,
        log_level="info",
        reload=False,
    )


if __name__ == "__main__":
    main()
