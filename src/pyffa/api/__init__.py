"""REST API exposing player search and matchup analysis."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response

from pyffa.analysis import MatchupAnalyzer
from pyffa.api.schemas import (
    MatchupAnalysisResponse,
    MatchupSampleResponse,
    PlayerResponse,
    ProjectionResponse,
    RecommendationBatchResponse,
    RecommendationRequest,
    RecommendationResponse,
    SearchResponse,
    SearchResultResponse,
    SeasonAverageResponse,
    SuggestionResponse,
)
from pyffa.config import Settings, load_settings
from pyffa.export import export_recommendations_to_csv
from pyffa.models import MatchupAnalysis, PlayerRecord, Recommendation
from pyffa.persistence import PlayerStore, SearchHistoryStore
from pyffa.search import generate_suggestions, search_players
from pyffa.sources import PlayerNotFound, UpstreamFailure


logger = logging.getLogger(__name__)


def _player_response(player: PlayerRecord) -> PlayerResponse:
    return PlayerResponse.model_validate(player.model_dump())


def _analysis_response(analysis: MatchupAnalysis) -> MatchupAnalysisResponse:
    return MatchupAnalysisResponse(
        player_id=analysis.player_id,
        player_name=analysis.player_name,
        opponent_team=analysis.opponent_team,
        average_fantasy_points=analysis.average_fantasy_points,
        historical_games=[
            MatchupSampleResponse.model_validate(sample.model_dump())
            for sample in analysis.historical_games
        ],
        projected_points=analysis.projected_points,
        confidence_level=analysis.confidence_level,
        comparison_to_season_average=analysis.comparison_to_season_average,
        performance_trend=analysis.performance_trend.value,
        sample_size=analysis.sample_size,
    )


def _recommendation_response(rec: Recommendation) -> RecommendationResponse:
    return RecommendationResponse(
        rank=rec.rank,
        player=_player_response(rec.player),
        projected_points=rec.projected_points,
        matchup_rating=rec.matchup_rating.value,
        confidence_level=rec.confidence_level,
        consistency_score=rec.consistency_score,
        injury_impact=rec.injury_impact.value,
        reasoning=rec.reasoning,
    )


@contextmanager
def _translate_source_errors() -> Iterator[None]:
    try:
        yield
    except PlayerNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UpstreamFailure as exc:
        logger.warning("Upstream failure: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def create_app(
    store: PlayerStore | None = None,
    *,
    history: SearchHistoryStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    store = store or PlayerStore(settings.db_path)
    history = history or SearchHistoryStore(
        store.db_path,
        max_history=settings.history_size,
        max_recent=settings.recent_size,
    )
    analyzer = MatchupAnalyzer(store, settings=settings)

    app = FastAPI(title="pyffa analyzer")
    app.state.player_store = store
    app.state.history_store = history
    app.state.analyzer = analyzer

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players/search", response_model=SearchResponse)
    def search(q: str = Query("", description="Player name, position or team")):
        with _translate_source_errors():
            results = search_players(store.list_players(), q)
            history.add_to_history(q, len(results))
        return SearchResponse(
            query=q,
            results=[
                SearchResultResponse(
                    player=_player_response(result.player),
                    relevance_score=result.relevance_score,
                    match_type=result.match_type.value,
                )
                for result in results
            ],
        )

    @app.get("/players/suggest", response_model=SuggestionResponse)
    def suggest(
        q: str = Query(""),
        limit: int = Query(settings.max_suggestions, ge=1, le=50),
    ):
        with _translate_source_errors():
            suggestions = generate_suggestions(store.list_players(), q, limit)
        return SuggestionResponse(query=q, suggestions=suggestions)

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    def get_player(player_id: str):
        with _translate_source_errors():
            return _player_response(store.get_player(player_id))

    @app.get("/players/{player_id}/matchups/{opponent}", response_model=MatchupAnalysisResponse)
    def matchup(player_id: str, opponent: str):
        with _translate_source_errors():
            store.get_player(player_id)
            analysis = analyzer.analyze_matchup(player_id, opponent)
        return _analysis_response(analysis)

    @app.get("/players/{player_id}/projection/{opponent}", response_model=ProjectionResponse)
    def projection(player_id: str, opponent: str):
        with _translate_source_errors():
            store.get_player(player_id)
            points = analyzer.calculate_projected_points(player_id, opponent)
        return ProjectionResponse(player_id=player_id, opponent_team=opponent, projected_points=points)

    @app.get("/players/{player_id}/season-average/{season}", response_model=SeasonAverageResponse)
    def season_average(player_id: str, season: int):
        with _translate_source_errors():
            store.get_player(player_id)
            average = analyzer.calculate_season_average(player_id, season)
        return SeasonAverageResponse(player_id=player_id, season=season, average_fantasy_points=average)

    @app.post("/recommendations", response_model=RecommendationBatchResponse)
    def recommendations(payload: RecommendationRequest):
        ranked = analyzer.generate_weekly_recommendations(payload.player_ids)
        return RecommendationBatchResponse(
            requested=len(payload.player_ids),
            recommendations=[_recommendation_response(rec) for rec in ranked],
        )

    @app.post("/recommendations/export.csv")
    def recommendations_csv(payload: RecommendationRequest):
        ranked = analyzer.generate_weekly_recommendations(payload.player_ids)
        return Response(
            content=export_recommendations_to_csv(ranked),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="recommendations.csv"'},
        )

    @app.get("/history/suggestions", response_model=SuggestionResponse)
    def history_suggestions(q: str = Query(""), limit: int = Query(settings.max_suggestions, ge=1, le=50)):
        with _translate_source_errors():
            suggestions = history.suggestions(q, limit)
        return SuggestionResponse(query=q, suggestions=suggestions)

    @app.delete("/history")
    def clear_history() -> dict[str, str]:
        with _translate_source_errors():
            history.clear()
        return {"status": "cleared"}

    return app


__all__ = ["create_app"]
