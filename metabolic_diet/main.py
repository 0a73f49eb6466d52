"""
Metabolic Formula Planner API - Main Application

Daily formula planning for patients with inborn errors of metabolism:
guideline targets, standard/special/modular formula amounts and
preparation quantities.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from metabolic_diet.core.app_logging import configure_logging
from metabolic_diet.core.config import settings
from metabolic_diet.api import formulas, guidelines, plans

configure_logging(settings.LOG_LEVEL)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    ## Metabolic Formula Planner API

    Calculate daily formula plans for PKU, MMA/PA, MSUD, GA and UCD.

    ### Features
    - Daily nutrient targets from clinical guideline ranges (MIN/MID/MAX)
    - Standard formula dosed to the tightest amino-acid ceiling
    - Special and protein-free modular formulas sized to close deficits
    - Scoops, water and per-feed volumes
    - Per-nutrient balance, advisory notes and intake review

    ### Core Endpoints
    - `/guideline` - Diseases, age brackets and guideline ranges
    - `/formula` - Formula catalog filtered by disease and role
    - `/plan/compute` - Calculate a complete daily formula plan
    """,
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(guidelines.router)
app.include_router(formulas.router)
app.include_router(plans.router)


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "guidelines": "/guideline",
            "formulas": "/formula",
            "plans": "/plan",
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
