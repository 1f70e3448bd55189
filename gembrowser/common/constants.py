# 내부 페이지 스킴
ABOUT_PREFIX = "about:"
NEWTAB_URL = "about:newtab"
BOOKMARKS_URL = "about:bookmarks"
HELP_URL = "about:help"
INTERNAL_URLS = (NEWTAB_URL, BOOKMARKS_URL, HELP_URL)

# Gemini 프로토콜
GEMINI_SCHEME = "gemini"
GEMINI_PORT = 1965
MAX_RESPONSE_HEADER = 1029  # status(2) + space + meta(1024) + CRLF

# 터미널 기본 크기
TERM_WIDTH = 80
TERM_HEIGHT = 24

# 렌더 폭 센티널 (-1 이면 항상 다시 렌더링)
FORCE_RENDER = -1

# 화면 위/아래 고정 영역 (탭 줄, 빈 줄, 빈 줄, 하단 바)
CHROME_ROWS = 4
