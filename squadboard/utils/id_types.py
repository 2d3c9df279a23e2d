from typing import NewType

UserId = NewType("UserId", int)
ListingId = NewType("ListingId", int)
ApplicationId = NewType("ApplicationId", int)
ResultNoticeId = NewType("ResultNoticeId", int)
PlayStyleTagId = NewType("PlayStyleTagId", int)
