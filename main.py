#!/usr/bin/env python3
"""
gembrowser - 터미널 Gemini 브라우저
사용법: python main.py [URL]
예시: python main.py gemini://gemini.circumlunar.space/

입력:
  텍스트       URL, 링크 번호, new:NUM, .., 검색어
  :KEY         키 입력 (예: :b, :f, :ctrl-t, :ctrl-w, :q, :!)
  :resize W H  터미널 크기 변경
"""
import sys
from gembrowser import Browser


def main():
    url = sys.argv[1] if len(sys.argv) > 1 else None

    browser = Browser()
    browser.new_tab(url)
    browser.run()


if __name__ == "__main__":
    main()
