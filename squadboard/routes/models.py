from pydantic import BaseModel

from squadboard.models.db.application import ApplicantView
from squadboard.models.db.listing import Listing, ListingDefaults, ListingView
from squadboard.models.db.play_style_tag import PlayStyleTag
from squadboard.models.db.profile import Profile
from squadboard.models.db.result_notice import ResultNotice
from squadboard.models.db.user import UserPublic
from squadboard.routes.auth import Token
from squadboard.utils.id_types import ListingId


class SuccessResponse(BaseModel):
    success: bool = True


class DataResponse[DataT](BaseModel):
    data: DataT


class TokenResponse(DataResponse[Token]):
    pass


class UserPublicResponse(DataResponse[UserPublic]):
    pass


class ListingsResponse(DataResponse[list[ListingView]]):
    pass


class ListingResponse(DataResponse[Listing]):
    pass


class ListingDefaultsResponse(DataResponse[ListingDefaults]):
    pass


class ApplicantsResponse(DataResponse[list[ApplicantView]]):
    pass


class AppliedListingIdsResponse(DataResponse[list[ListingId]]):
    pass


class ResultNoticesResponse(DataResponse[list[ResultNotice]]):
    pass


class ProfileResponse(DataResponse[Profile | None]):
    pass


class PlayStyleTagsResponse(DataResponse[list[PlayStyleTag]]):
    pass


class PlayStyleTagResponse(DataResponse[PlayStyleTag]):
    pass
