from dishka import AsyncContainer, make_async_container

from trackrate.config import Config
from trackrate.domain.access.util.di import AccessProvider
from trackrate.domain.activity.util.di import ActivityProvider
from trackrate.domain.engagement.util.di import EngagementProvider
from trackrate.domain.identity.util.di import IdentityProvider
from trackrate.domain.rating.util.di import RatingProvider
from trackrate.infrastructure.persistence import PersistenceProvider
from trackrate.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        PersistenceProvider(),
        ActivityProvider(),
        AccessProvider(),
        IdentityProvider(),
        EngagementProvider(),
        RatingProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
