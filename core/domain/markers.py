"""
텍스트 마커 처리

제목 끝의 "MHD 31.12.24" 접미사와 설명 HTML 안의 태그 span(보이지 않는 MHD,
단품 EAN)을 찾고, 교체하고, 제거합니다.

마커 종류마다 MarkerSpec(찾기 패턴 + 렌더러 + 제거 패턴)을 하나씩 정의하고,
실제 치환은 MarkerSplicer 한 곳에서만 수행합니다.

동작 규칙:
- upsert는 멱등입니다: upsert(upsert(t, v), v) == upsert(t, v)
- 같은 종류의 마커가 여러 개 있으면 첫 번째를 교체하고 나머지는 제거합니다
  (마지막으로 쓴 값이 이깁니다)
- remove 결과는 None이 아니라 항상 문자열입니다
"""

import html
import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern

TAG_PATTERN = re.compile(r"<[^>]*>")
EMPTY_SPAN_PATTERN = re.compile(r"<span\b[^>]*>\s*</span>", re.IGNORECASE)
BLANK_RUN_PATTERN = re.compile(r"\n(?:[ \t\r\f\v]*\n){2,}[ \t\r\f\v]*")

DESCRIPTION_SEPARATOR = "\n\n"

# 엄격한 제목 패턴: "MHD" + 선택적 ":" + DD.MM.YY 또는 DD.MM.YYYY, 문자열 끝에 고정
TITLE_MARKER_PATTERN = re.compile(
    r"\s*(?<!\S)MHD:?\s*(?P<value>[0-9]{2}\.[0-9]{2}\.(?:[0-9]{4}|[0-9]{2}))\s*\Z",
    re.IGNORECASE,
)

DESCRIPTION_DATE_PATTERN = re.compile(r"[0-9]{1,2}\.[0-9]{1,2}\.[0-9]{4}")
EAN_PATTERN = re.compile(r"^[0-9]{8,13}$")

BEST_BEFORE_CLASS = "invisible-date"
BEST_BEFORE_LABEL = "Mindestens haltbar bis:"
SINGLE_EAN_CLASS = "single-ean"
SINGLE_EAN_LABEL = "Einzel EAN:"


@dataclass(frozen=True)
class MarkerSpec:
    """마커 한 종류에 대한 설정 값"""

    name: str
    locate: Pattern[str]
    render: Callable[[str], str]
    remove_all: Pattern[str]
    separator: str = ""
    value_pattern: Optional[Pattern[str]] = None
    cleanup: bool = False
    trim_result: bool = False
    skip_blank_text: bool = False


def _strip_all(pattern: Pattern[str], text: str) -> str:
    """더 이상 일치하는 부분이 없을 때까지 제거합니다."""
    while True:
        stripped = pattern.sub("", text)
        if stripped == text:
            return stripped
        text = stripped


def clean_description(text: Optional[str]) -> str:
    """
    마커 제거 후 남은 흔적을 정리합니다.

    빈 span 태그를 지우고, 3개 이상 연속된 줄바꿈을 빈 줄 하나로 줄인 뒤
    앞뒤 공백을 제거합니다.
    """
    if not text:
        return ""

    text = _strip_all(EMPTY_SPAN_PATTERN, text)
    text = BLANK_RUN_PATTERN.sub(DESCRIPTION_SEPARATOR, text)
    return text.strip()


class MarkerSplicer:
    """MarkerSpec 하나를 기준으로 텍스트 안의 마커를 관리합니다."""

    def __init__(self, spec: MarkerSpec):
        self.spec = spec

    @property
    def name(self) -> str:
        return self.spec.name

    def contains(self, text: Optional[str]) -> bool:
        """마커가 존재하는지 확인"""
        return bool(text) and self.spec.locate.search(text) is not None

    def upsert(self, text: Optional[str], value: Optional[str]) -> str:
        """
        마커를 추가하거나 교체합니다.

        값이 비어 있으면 remove와 같습니다. 기존 마커가 있으면 첫 번째 마커를
        교체하고, 없으면 공백을 정리한 텍스트 뒤에 구분자와 함께 붙입니다.

        Args:
            text: 현재 텍스트 (None 허용)
            value: 마커에 넣을 값

        Returns:
            갱신된 텍스트
        """
        if value is None or not str(value).strip():
            return self.remove(text)

        text = text or ""
        if self.spec.skip_blank_text and not text.strip():
            return text

        rendered = self.spec.render(str(value).strip())
        match = self.spec.locate.search(text)

        if match is None:
            base = text.strip()
            result = base + self.spec.separator + rendered if base else rendered
            return result.strip() if self.spec.trim_result else result

        tail = text[match.end():]
        collapsed = _strip_all(self.spec.locate, tail)
        result = text[:match.start()] + rendered + collapsed

        if collapsed != tail and self.spec.cleanup:
            result = clean_description(result)
        if self.spec.trim_result:
            result = result.strip()
        return result

    def remove(self, text: Optional[str]) -> str:
        """
        모든 마커를 제거합니다.

        일치하는 마커가 없으면 입력을 그대로 돌려줍니다.
        """
        if not text:
            return ""

        stripped = _strip_all(self.spec.remove_all, text)
        if stripped == text:
            return text

        if self.spec.cleanup:
            return clean_description(stripped)
        return stripped.strip()

    def extract(self, text: Optional[str]) -> Optional[str]:
        """첫 번째 마커의 값을 추출합니다. 없거나 형식이 맞지 않으면 None."""
        if not text:
            return None

        match = self.spec.locate.search(text)
        if match is None:
            return None

        raw = html.unescape(TAG_PATTERN.sub("", match.group("value"))).strip()
        if self.spec.value_pattern is None:
            return raw or None

        found = self.spec.value_pattern.search(raw)
        return found.group(0) if found else None


def _class_attribute(css_class: str) -> str:
    # 작은/큰따옴표 모두 허용, class 목록 안의 토큰도 허용
    token = re.escape(css_class)
    return (
        r"""(?<![\w-])class\s*=\s*(?P<quote>["'])"""
        rf"""(?:[^"'>]*\s)?{token}(?:\s[^"'>]*)?(?P=quote)"""
    )


def span_marker_spec(
    name: str,
    css_class: str,
    label: str,
    content_pattern: str,
    value_pattern: Optional[Pattern[str]] = None,
) -> MarkerSpec:
    """
    설명 HTML용 inline span 마커 설정을 만듭니다.

    Args:
        name: 마커 이름
        css_class: span의 class 토큰
        label: 렌더링할 때 값 앞에 붙는 문구
        content_pattern: 여는 태그와 </span> 사이 내용 패턴 (value 그룹 포함)
        value_pattern: 추출 값 검증 패턴
    """
    pattern = re.compile(
        rf"<span\b[^>]*?{_class_attribute(css_class)}[^>]*>{content_pattern}</span>",
        re.IGNORECASE | re.DOTALL,
    )

    def render(value: str) -> str:
        return f'<span class="{css_class}">{label} {html.escape(value, quote=False)}</span>'

    return MarkerSpec(
        name=name,
        locate=pattern,
        render=render,
        remove_all=pattern,
        separator=DESCRIPTION_SEPARATOR,
        value_pattern=value_pattern,
        cleanup=True,
    )


TITLE_MARKER = MarkerSpec(
    name="title_mhd",
    locate=TITLE_MARKER_PATTERN,
    render=lambda value: f" MHD {value}",
    remove_all=TITLE_MARKER_PATTERN,
    trim_result=True,
    skip_blank_text=True,
)

# 내용 안에서 다른 <span>으로 넘어가지 않음
BEST_BEFORE_MARKER = span_marker_spec(
    name="best_before",
    css_class=BEST_BEFORE_CLASS,
    label=BEST_BEFORE_LABEL,
    content_pattern=r"(?P<value>(?:(?!</?span\b).)*?)",
    value_pattern=DESCRIPTION_DATE_PATTERN,
)

SINGLE_EAN_MARKER = span_marker_spec(
    name="single_ean",
    css_class=SINGLE_EAN_CLASS,
    label=SINGLE_EAN_LABEL,
    content_pattern=r"\s*Einzel\s+EAN:\s*(?P<value>[^<]*?)\s*",
    value_pattern=EAN_PATTERN,
)


class TitleMarkerPolicy(MarkerSplicer):
    """제목 끝 "MHD DD.MM.YY" 접미사"""

    def __init__(self):
        super().__init__(TITLE_MARKER)


class DescriptionMarkerPolicy(MarkerSplicer):
    """설명 HTML의 inline span 마커"""

    @classmethod
    def best_before(cls) -> "DescriptionMarkerPolicy":
        return cls(BEST_BEFORE_MARKER)

    @classmethod
    def single_ean(cls) -> "DescriptionMarkerPolicy":
        return cls(SINGLE_EAN_MARKER)
