from unittest.mock import AsyncMock, call

import pytest

from dailyscry.models import (
    BudgetExhaustedError,
    Card,
    ChannelError,
    DataIntegrityError,
    PublishChainError,
)
from dailyscry.publishing import ELLIPSIS
from dailyscry.rendering import RenderedCard, render_card
from dailyscry.services.publisher import (
    HASHTAGS,
    format_for_stdout,
    mastodon_reservations,
    mastodon_trailer,
    publish_to_mastodon,
    publish_to_telegram,
)

KYTHEON = "Kytheon, Hero of Akros // Gideon, Battle-Forged"
LINK = "https://scryfall.com/card/ori/23/kytheon-hero-of-akros-gideon-battle-forged"


def _channel() -> AsyncMock:
    channel = AsyncMock()
    channel.upload.side_effect = lambda data, description: f"media-{data.decode()}"
    replies = iter(range(2, 100))
    channel.post_root.return_value = "post-1"
    channel.post_reply.side_effect = lambda text, parent_id: f"post-{next(replies)}"
    return channel


class TestMastodonTrailer:
    def test_trailer(self) -> None:
        assert mastodon_trailer("\n\nIllustrated by X", "https://s.example/c") == (
            f"\n\nIllustrated by X\nhttps://s.example/c\n{HASHTAGS}"
        )

    def test_trailer_without_artist(self) -> None:
        assert mastodon_trailer(None, "https://s.example/c") == f"\nhttps://s.example/c\n{HASHTAGS}"

    def test_link_reserved_as_fixed_length(self) -> None:
        reservations = mastodon_reservations("\n\nIllustrated by X", "https://a-very-long.example/" + "x" * 200)

        assert 23 in reservations
        assert all(not isinstance(r, str) or "example" not in r for r in reservations)


class TestPublishToMastodon:
    @pytest.mark.asyncio
    async def test_publishes_one_thread(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards[KYTHEON])
        channel = _channel()

        thread = await publish_to_mastodon(rendered, [b"front", b"back"], LINK, channel, 500)

        assert channel.upload.await_args_list == [
            call(b"front", rendered.texts[0]),
            call(b"back", rendered.texts[1]),
        ]
        trailer = mastodon_trailer(rendered.artist, LINK)
        root_text, media_ids = channel.post_root.await_args.args
        assert media_ids == ["media-front", "media-back"]
        assert root_text.endswith(ELLIPSIS + trailer)
        assert len(thread.posts) > 1
        assert all(post.body.endswith(trailer) for post in thread.posts)
        assert thread.posts[1].parent_id == "post-1"

    @pytest.mark.asyncio
    async def test_posts_respect_limit(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards[KYTHEON])
        channel = _channel()

        thread = await publish_to_mastodon(rendered, [b"front", b"back"], LINK, channel, 500)

        for post in thread.posts:
            counted = len(post.body) - len(LINK) + 23
            assert counted <= 500

    @pytest.mark.asyncio
    async def test_budget_checked_before_uploading(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards[KYTHEON])
        channel = _channel()

        with pytest.raises(BudgetExhaustedError):
            await publish_to_mastodon(rendered, [b"front", b"back"], LINK, channel, 50)

        channel.upload.assert_not_awaited()
        channel.post_root.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_image_count_must_match(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards[KYTHEON])

        with pytest.raises(DataIntegrityError):
            await publish_to_mastodon(rendered, [b"front"], LINK, _channel(), 500)

    @pytest.mark.asyncio
    async def test_chain_failure_propagates(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards[KYTHEON])
        channel = _channel()
        channel.post_reply.side_effect = RuntimeError("rate limited")

        with pytest.raises(PublishChainError) as exc_info:
            await publish_to_mastodon(rendered, [b"front", b"back"], LINK, channel, 500)

        assert exc_info.value.thread.post_ids == ["post-1"]


class TestPublishToTelegram:
    @pytest.mark.asyncio
    async def test_one_thread_per_image(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards[KYTHEON])
        channel = _channel()
        channel.post_root.side_effect = ["post-a", "post-b"]

        threads = await publish_to_telegram(rendered, [b"front", b"back"], LINK, channel, 4096)

        assert channel.upload.await_args_list == [call(b"front", LINK), call(b"back", LINK)]
        assert channel.post_root.await_args_list == [
            call(rendered.texts[0] + rendered.artist, ["media-front"]),
            call(rendered.texts[1] + rendered.artist, ["media-back"]),
        ]
        assert [thread.root_id for thread in threads] == ["post-a", "post-b"]

    @pytest.mark.asyncio
    async def test_long_text_is_threaded(self) -> None:
        rendered = RenderedCard(texts=("x" * 30,), artist="\n\nIllustrated by X")
        channel = _channel()

        threads = await publish_to_telegram(rendered, [b"card"], LINK, channel, 30)

        assert len(threads) == 1
        bodies = [post.body for post in threads[0].posts]
        assert len(bodies) == 3
        assert all(len(body) <= 30 for body in bodies)
        assert all(body.endswith("\n\nIllustrated by X") for body in bodies)

    @pytest.mark.asyncio
    async def test_single_face_has_no_trailer(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards["Grizzly Bears"])
        channel = _channel()

        await publish_to_telegram(rendered, [b"card"], LINK, channel, 4096)

        channel.post_root.assert_awaited_once_with(rendered.texts[0], ["media-card"])

    @pytest.mark.asyncio
    async def test_budget_checked_before_uploading(self) -> None:
        rendered = RenderedCard(texts=("text",), artist="\n\nIllustrated by Someone Long")
        channel = _channel()

        with pytest.raises(BudgetExhaustedError):
            await publish_to_telegram(rendered, [b"card"], LINK, channel, 10)

        channel.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_photos_and_threads_alternate(self) -> None:
        rendered = RenderedCard(texts=("front", "back"), artist=None)
        channel = _channel()

        await publish_to_telegram(rendered, [b"front", b"back"], LINK, channel, 4096)

        assert [c[0] for c in channel.mock_calls] == ["upload", "post_root", "upload", "post_root"]

    @pytest.mark.asyncio
    async def test_failure_in_later_thread_keeps_earlier_ids(self) -> None:
        rendered = RenderedCard(texts=("front", "back"), artist=None)
        channel = _channel()
        channel.upload.side_effect = ["10", "11"]
        channel.post_root.side_effect = ["20", RuntimeError("flood control")]

        with pytest.raises(PublishChainError) as exc_info:
            await publish_to_telegram(rendered, [b"front", b"back"], LINK, channel, 4096)

        error = exc_info.value
        assert error.media_ids == ["10", "11"]
        assert [thread.post_ids for thread in error.completed] == [["20"]]
        assert error.thread.posts == []
        assert error.published_ids == ["10", "11", "20"]
        assert isinstance(error.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_failed_photo_keeps_earlier_ids(self) -> None:
        rendered = RenderedCard(texts=("front", "back"), artist=None)
        channel = _channel()
        channel.upload.side_effect = ["10", ChannelError("telegram", "sendPhoto failed")]
        channel.post_root.side_effect = ["20"]

        with pytest.raises(PublishChainError) as exc_info:
            await publish_to_telegram(rendered, [b"front", b"back"], LINK, channel, 4096)

        error = exc_info.value
        assert error.published_ids == ["10", "20"]
        assert isinstance(error.__cause__, ChannelError)
        channel.post_root.assert_awaited_once()


class TestFormatForStdout:
    def test_single_face(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards["Black Lotus"])

        assert format_for_stdout(rendered, "https://scryfall.com/card/lea/232/black-lotus") == (
            "Black Lotus\t{0}\n"
            "Artifact\n"
            "{T}, Sacrifice Black Lotus: Add three mana of any one color.\n"
            "\n"
            "Illustrated by Christopher Rush\n"
            "\n"
            "https://scryfall.com/card/lea/232/black-lotus"
        )

    def test_separate_images(self, cards: dict[str, Card]) -> None:
        rendered = render_card(cards["Chillerpillar // Chillerpillar"])

        assert format_for_stdout(rendered, "https://s.example/c") == (
            "Chillerpillar\nCard\n\nChillerpillar\nCard\n\nIllustrated by Suzanne Helmigh\n\nhttps://s.example/c"
        )
