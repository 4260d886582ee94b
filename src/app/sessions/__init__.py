"""Sessions: publicação do estado da tela inicial."""

from app.sessions.home_feed_publisher import HomeFeedPublisher

__all__ = ["HomeFeedPublisher"]
