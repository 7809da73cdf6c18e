import traceback
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from common.constants import PATHS, SERVER
from common.errors import NotFoundError
from common.utils import setup_logging
from server.recommendation_service import RecommendationService
from server.schemas import ProductDetails, ProductSummary, RecommendResponse, StatusResponse


def configure_cors(app: FastAPI, origins) -> bool:
    """Allow browser clients from the given origins. Returns False when none are configured."""
    if not origins:
        return False
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return True


app = FastAPI(title="Product Recommender API", version="0.1.0")
configure_cors(app, SERVER["cors_origins"])

service = RecommendationService()
logger = setup_logging(__name__, PATHS["app_log_file"])

NOT_READY_DETAIL = "Recommendation engine is not available. Check the interaction and product files and reload."


def _require_ready():
    if not service.ready:
        raise HTTPException(status_code=503, detail=NOT_READY_DETAIL)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "recommendations_ready": service.ready,
        "error": service.init_error,
    }


@app.get("/engine/status", response_model=StatusResponse)
def engine_status():
    """Report readiness and the size of the loaded graph."""
    return service.status()


@app.post("/engine/reload", response_model=StatusResponse)
def engine_reload():
    """Rebuild the engine from the data files and swap it in."""
    try:
        service.reinitialize()
        return service.status()
    except Exception as e:
        error_msg = f"{str(e)}\n{traceback.format_exc()}"
        logger.error(f"ERROR in /engine/reload: {error_msg}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/recommend/popular", response_model=RecommendResponse)
def recommend_popular():
    """Cold-start recommendations: the most interacted products."""
    try:
        _require_ready()
        products = service.popularity()
        return RecommendResponse(strategy="popularity", products=[ProductSummary(**p) for p in products])
    except HTTPException:
        raise
    except Exception as e:
        error_msg = f"{str(e)}\n{traceback.format_exc()}"
        logger.error(f"ERROR in /recommend/popular: {error_msg}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/recommend/collaborative/{user_id}", response_model=RecommendResponse)
def recommend_collaborative(user_id: str):
    try:
        _require_ready()
        products = service.collaborative(user_id)
        return RecommendResponse(
            user_id=user_id, strategy="collaborative", products=[ProductSummary(**p) for p in products]
        )
    except HTTPException:
        raise
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    except Exception as e:
        error_msg = f"{str(e)}\n{traceback.format_exc()}"
        logger.error(f"ERROR in /recommend/collaborative/{user_id}: {error_msg}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/recommend/content/{user_id}", response_model=RecommendResponse)
def recommend_content(user_id: str):
    try:
        _require_ready()
        products = service.content_based(user_id)
        return RecommendResponse(user_id=user_id, strategy="content", products=[ProductSummary(**p) for p in products])
    except HTTPException:
        raise
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    except Exception as e:
        error_msg = f"{str(e)}\n{traceback.format_exc()}"
        logger.error(f"ERROR in /recommend/content/{user_id}: {error_msg}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/recommend/{user_id}", response_model=RecommendResponse)
def recommend(user_id: str, strategy: Optional[str] = Query(None, pattern="^(collaborative|content)$")):
    """
    Recommendations with cold-start fallback.

    Unknown users, and users without history, get the popularity list.
    """
    try:
        _require_ready()
        products, used = service.recommend(user_id, strategy)
        return RecommendResponse(user_id=user_id, strategy=used, products=[ProductSummary(**p) for p in products])
    except HTTPException:
        raise
    except Exception as e:
        error_msg = f"{str(e)}\n{traceback.format_exc()}"
        logger.error(f"ERROR in /recommend/{user_id}: {error_msg}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/product/{product_id}", response_model=ProductDetails)
def get_product_details(product_id: str):
    """
    Retrieve attributes, display name and interaction count for a product.
    """
    try:
        _require_ready()
        details = service.get_product_details(product_id)
        if details is None:
            raise HTTPException(status_code=404, detail=f"Product with ID {product_id} not found")
        return ProductDetails(**details)
    except HTTPException:
        raise
    except Exception as e:
        error_msg = f"{str(e)}\n{traceback.format_exc()}"
        logger.error(f"ERROR in /product/{product_id}: {error_msg}")
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    uvicorn.run(app, host=SERVER["host"], port=SERVER["port"])
