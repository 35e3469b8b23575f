"""
Shared test fixtures and configuration for the witplux test suite.

This module provides:
- A fake HTTP client serving canned pages by URL
- Plugin configuration pointed at a test origin
- Sample witanime pages (listing, show details, episode page)
"""

import pytest

from witplux.core.exceptions import NetworkError
from witplux.plugins.witanime import WitAnimeConfig, WitAnimePlugin


ORIGIN = "https://witanime.test"


# ========== Fake HTTP Client ==========


class FakeClient:
    """
    Stand-in for the plugin HTTP layer.

    Pages missing from the maps answer like a 404: fetch_text and post_text
    raise NetworkError, probe returns 404.
    """

    def __init__(self, pages=None, posts=None, statuses=None):
        self.pages = dict(pages or {})
        self.posts = dict(posts or {})
        self.statuses = dict(statuses or {})
        self.requests = []

    async def fetch_text(self, url, referer=None):
        self.requests.append(("GET", url, referer))
        return self._answer(self.pages, url)

    async def post_text(self, url, data, referer=None):
        self.requests.append(("POST", url, referer))
        return self._answer(self.posts, url)

    async def probe(self, url, referer=None):
        self.requests.append(("PROBE", url, referer))
        return self.statuses.get(url, 404)

    @staticmethod
    def _answer(table, url):
        body = table.get(url)
        if body is None:
            raise NetworkError(f"HTTP 404 error for {url}", url=url, status_code=404)
        if isinstance(body, Exception):
            raise body
        return body

    def urls(self, method):
        return [url for verb, url, _ in self.requests if verb == method]


# ========== Configuration Fixtures ==========


@pytest.fixture
def origin():
    return ORIGIN


@pytest.fixture
def config():
    """Plugin configuration pointed at the test origin."""
    return WitAnimeConfig(main_url=ORIGIN, operation_deadline=5.0)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def plugin(fake_client):
    """WitAnime plugin whose HTTP layer is the fake client."""
    instance = WitAnimePlugin({"main_url": ORIGIN, "operation_deadline": 5.0})
    instance.fetch_text = fake_client.fetch_text
    instance.post_text = fake_client.post_text
    instance.probe = fake_client.probe
    return instance


# ========== Sample Pages ==========


@pytest.fixture
def listing_html():
    """Category listing with a duplicate card, an origin link and a pager."""
    return """
    <html><body>
      <div class="anime-card-container">
        <div class="anime-card-poster">
          <img data-src="https://witanime.test/uploads/naruto.jpg" src="https://witanime.test/uploads/default.png">
        </div>
        <div class="anime-card-type"><a href="/anime-type/tv/">TV</a></div>
        <div class="anime-card-title"><h3><a href="/anime/naruto/">Naruto</a></h3></div>
      </div>
      <div class="anime-card-container">
        <img data-src="https://witanime.test/uploads/lazy.gif" src="/uploads/one-piece-film-red.jpg">
        <div class="anime-card-type"><a href="/anime-type/movie/">Movie</a></div>
        <h3><a href="https://witanime.test/anime/one-piece-film-red/">One Piece Film Red</a></h3>
      </div>
      <div class="anime-card-container">
        <div class="anime-card-type"><a href="/anime-type/ova/">OVA</a></div>
        <h3><a href="/anime/shingeki-no-kyojin-ova/">Shingeki no Kyojin OVA</a></h3>
      </div>
      <div class="anime-card-container">
        <h3><a href="/anime/naruto/">Naruto</a></h3>
      </div>
      <div class="anime-card-container">
        <h3><a href="/">الرئيسية</a></h3>
      </div>
      <div class="anime-card-container">
        <span>no link here</span>
      </div>
      <ul class="pagination">
        <li><a class="page-numbers" href="/anime-type/tv/page/1/">1</a></li>
        <li><a class="next page-numbers" href="/anime-type/tv/page/2/">»</a></li>
      </ul>
    </body></html>
    """


@pytest.fixture
def home_html():
    """Homepage with one pinned card and latest-episode cards."""
    return """
    <html><body>
      <div class="anime-card-container">
        <h3><a href="/anime/naruto/">Naruto</a></h3>
      </div>
      <div class="episodes-card-container">
        <img data-src="https://witanime.test/uploads/frieren.jpg">
        <h3><a href="https://witanime.test/episode/sousou-no-frieren-episode-5/">الحلقة 5</a></h3>
        <div class="ep-card-anime-title"><h3><a href="/anime/sousou-no-frieren/">Sousou no Frieren</a></h3></div>
      </div>
      <div class="episodes-card-container">
        <h3><a href="https://witanime.test/episode/naruto-episode-9/">الحلقة 9</a></h3>
        <div class="ep-card-anime-title"><h3><a href="/anime/naruto/">Naruto</a></h3></div>
      </div>
      <div class="episodes-card-container">
        <div class="ep-card-anime-title"><h3><a href="/anime/no-episode-link/">No Episode Link</a></h3></div>
      </div>
    </body></html>
    """


@pytest.fixture
def show_html():
    """Series detail page announcing its episodes through openEpisode()."""
    return """
    <html><body>
      <div class="anime-info-container">
        <div class="anime-thumbnail"><img class="thumbnail" src="/uploads/frieren.jpg"></div>
        <h1 class="anime-details-title">Sousou no Frieren</h1>
        <ul class="anime-genres">
          <li><a href="https://witanime.test/anime-genre/adventure/">مغامرات</a></li>
          <li><a href="https://witanime.test/anime-genre/fantasy/">خيال</a></li>
        </ul>
        <p class="anime-story">رحلة الساحرة فريرين بعد هزيمة ملك الشياطين.</p>
        <div class="anime-info"><span>النوع:</span> <a href="/anime-type/tv/">TV</a></div>
        <div class="anime-info"><span>بداية العرض:</span> 2023</div>
      </div>
      <div class="episodes-list">
        <div class="episode-card"><h3><a onclick="openEpisode('aHR0cHM6Ly93aXRhbmltZS50ZXN0L2VwaXNvZGUvZnJpZXJlbi1lcGlzb2RlLTEv')">الحلقة 1</a></h3></div>
        <div class="episode-card"><h3><a onclick="openEpisode('/episode/frieren-episode-2/')">الحلقة 2</a></h3></div>
      </div>
      <script>
        document.querySelectorAll('.episode-card a');
        openEpisode('aHR0cHM6Ly93aXRhbmltZS50ZXN0L2VwaXNvZGUvZnJpZXJlbi1lcGlzb2RlLTEv');
        openEpisode('/episode/frieren-episode-2/');
      </script>
      <script src="/wp-content/themes/witanime/app.js"></script>
    </body></html>
    """


@pytest.fixture
def movie_html():
    """Movie detail page: no episode list."""
    return """
    <html><body>
      <h1 class="anime-details-title">Kimi no Na wa</h1>
      <div class="anime-info"><span>النوع:</span> <a href="/anime-type/movie/">فيلم</a></div>
      <div class="anime-story">فيلم عن تبادل الأجساد.</div>
    </body></html>
    """


@pytest.fixture
def episode_url():
    return f"{ORIGIN}/episode/frieren-episode-1/"


@pytest.fixture
def episode_html():
    """Episode page with an HLS video, a dead player iframe and a trailer."""
    return """
    <html><body>
      <video src="https://cdn.test/frieren/master.m3u8">
        <track kind="subtitles" src="/subs/ar.vtt" srclang="ar" label="العربية">
        <track kind="chapters" src="/subs/chapters.vtt">
      </video>
      <iframe src="https://player.test/embed/404"></iframe>
      <iframe src="https://www.youtube.com/embed/abc"></iframe>
    </body></html>
    """
