from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field
from pathlib import Path
import sys
import logging
from typing import Optional

# ----- Ensure local package import (src/lottosim) without editable install -----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC = PROJECT_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lottosim.errors import LottoError, SequenceError
from lottosim.generate import total_space
from lottosim.lottery import GameStats, Lottery
from lottosim.rules import GAMES, JACKPOT, get_game
from lottosim.settings import configure_logging, get_settings

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ----- Response / request models -----
class APIPart(BaseModel):
    count: int
    max: int

class APIGame(BaseModel):
    key: str
    name: str
    cost: int
    start_jackpot: int
    parts: list[APIPart]
    multiplier: Optional[str] = None
    odds: int

class APIDraw(BaseModel):
    game: str
    numbers: list[list[int]]
    multiplier: Optional[int] = None

class APIOutcome(BaseModel):
    match: list[int]
    prize: str
    occurrences: int
    paid: int

class APIStats(BaseModel):
    game: str
    draw: Optional[list[list[int]]] = None
    multiplier: Optional[int] = None
    tickets: int
    picks: int
    jackpot: int
    jackpot_winners: int
    jackpot_share: int
    odds: int
    credits: int
    debits: int
    balance: int
    outcomes: list[APIOutcome]

class CheckRequest(BaseModel):
    game: str = "powerball"
    picks: list[list[list[int]]] = Field(..., min_length=1)
    multiplier: bool = False
    seed: Optional[int] = None
    draw: Optional[list[list[int]]] = None

class APIPickResult(BaseModel):
    numbers: list[list[int]]
    match: list[int]
    jackpot: bool
    amount: int

class CheckResponse(BaseModel):
    game: str
    draw: list[list[int]]
    multiplier: Optional[int] = None
    winnings: int
    cost: int
    results: list[APIPickResult]


def _stats_model(key: str, s: GameStats) -> APIStats:
    return APIStats(
        game=key,
        draw=[list(p) for p in s.draw.parts] if s.draw else None,
        multiplier=s.multiplier,
        tickets=s.tickets,
        picks=s.picks,
        jackpot=s.jackpot,
        jackpot_winners=s.jackpot_winners,
        jackpot_share=s.jackpot_share,
        odds=s.odds,
        credits=s.credits,
        debits=s.debits,
        balance=s.balance,
        outcomes=[
            APIOutcome(
                match=list(o.key),
                prize=JACKPOT.value if o.prize is JACKPOT else str(o.prize),
                occurrences=o.occurrences,
                paid=o.paid,
            )
            for o in s.outcomes
        ],
    )

# ----- FastAPI app -----
app = FastAPI(title="Lotto Sim API")

@app.exception_handler(LottoError)
async def _handle_lotto_error(request: Request, exc: LottoError):
    status = 409 if isinstance(exc, SequenceError) else 400
    return JSONResponse(
        status_code=status,
        content={"error": exc.code, "message": exc.message, "details": exc.details},
    )

@app.get("/", response_class=PlainTextResponse)
def root():
    return "Lotto Sim API — try /simulate?game=powerball&tickets=1000&picks=10&seed=42"

@app.get("/games", response_model=list[APIGame])
def games():
    out = []
    for key, cfg in GAMES.items():
        out.append(APIGame(
            key=key,
            name=cfg.name,
            cost=cfg.cost,
            start_jackpot=cfg.start_jackpot,
            parts=[APIPart(count=p.count, max=p.max) for p in cfg.parts],
            multiplier=cfg.multiplier.name if cfg.multiplier else None,
            odds=total_space(cfg.parts),
        ))
    return out

@app.get("/odds")
def odds(game: str = Query(settings.GAME)):
    lotto = Lottery(get_game(game))
    return {"game": game, "odds": lotto.odds(), "parts": lotto.game_picker.describe()}

@app.get("/draw", response_model=APIDraw)
def draw(game: str = Query(settings.GAME), seed: Optional[int] = None):
    lotto = Lottery(get_game(game), settings.source(seed))
    result = lotto.draw()
    return APIDraw(game=game, numbers=[list(p) for p in result.parts], multiplier=lotto.multiplier)

# ----- API endpoint -----
@app.get("/simulate", response_model=APIStats)
def simulate(
    game: str = Query(settings.GAME),
    tickets: int = Query(1000, ge=1),
    picks: int = Query(10, ge=1, le=100),
    seed: Optional[int] = None,
    multiplier: bool = False,
):
    if settings.MAX_TICKETS and tickets > settings.MAX_TICKETS:
        return JSONResponse(
            status_code=400,
            content={"error": "too_many_tickets", "message": f"tickets must be <= {settings.MAX_TICKETS}"},
        )
    lotto = Lottery(get_game(game), settings.source(seed))
    stats = lotto.play(tickets=tickets, picks=picks, multiplier=multiplier)
    logger.info("simulated %s: %d tickets, balance %d", game, stats.tickets, stats.balance)
    return _stats_model(game, stats)

@app.post("/check", response_model=CheckResponse)
def check(req: CheckRequest):
    lotto = Lottery(get_game(req.game), settings.source(req.seed))
    ticket = lotto.buy_ticket(picks=req.picks, multiplier=req.multiplier)
    official = lotto.draw(req.draw)
    lotto.check_tickets()
    lotto.award_jackpots()
    return CheckResponse(
        game=req.game,
        draw=[list(p) for p in official.parts],
        multiplier=lotto.multiplier,
        winnings=ticket.winnings,
        cost=ticket.cost,
        results=[
            APIPickResult(
                numbers=[list(p) for p in r.pick.parts],
                match=list(r.match),
                jackpot=r.jackpot,
                amount=r.amount,
            )
            for r in ticket.results
        ],
    )
