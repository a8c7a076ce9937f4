"""Rule services and the turn-by-turn game service."""

from monopoly_sim.services.building import BuildingService
from monopoly_sim.services.card import CardService
from monopoly_sim.services.game_service import GameService
from monopoly_sim.services.jail import JailService
from monopoly_sim.services.monopoly import MonopolyChecker
from monopoly_sim.services.mortgage import MortgageService
from monopoly_sim.services.rent import RentCalculator
from monopoly_sim.services.trading import TradeOffer, TradingService

__all__ = [
    "BuildingService",
    "CardService",
    "GameService",
    "JailService",
    "MonopolyChecker",
    "MortgageService",
    "RentCalculator",
    "TradeOffer",
    "TradingService",
]
