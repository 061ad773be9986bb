from fastapi import APIRouter, Depends, Query

from ecoeats.api.dependencies import get_current_user, get_service
from ecoeats.domain.User import User
from ecoeats.logic.rewards.tiers import REWARD_TIERS
from ecoeats.logic.service import EcoEatsService
from ecoeats.utilities.validators import RedeemInput

router = APIRouter(prefix="/api/rewards", tags=["rewards"])


@router.get("")
def rewards_summary(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    return service.rewards_summary(user.id)


@router.get("/tiers")
def reward_tiers():
    return [t.to_dict() for t in REWARD_TIERS]


@router.post("/redeem")
def redeem(payload: RedeemInput, user: User = Depends(get_current_user),
           service: EcoEatsService = Depends(get_service)):
    result = service.redemption.redeem(user.id, payload.reward_type)
    data = result.to_dict()
    data['eco_points'] = user.eco_points
    data['wallet_balance'] = str(user.wallet_balance)
    return data


@router.get("/leaderboard")
def leaderboard(limit: int = Query(default=10, ge=1, le=100), service: EcoEatsService = Depends(get_service)):
    return service.leaderboard(limit)
