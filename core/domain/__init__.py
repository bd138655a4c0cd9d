"""
Domain 패키지

도메인 엔티티, 값 객체, 비즈니스 규칙을 정의합니다.
외부 의존성 없이 순수한 비즈니스 로직만 포함합니다.

주요 구성:
- DateTokenCodec: DDMMYY 토큰 파싱/검증/포맷
- MarkerSplicer: 제목/설명 마커 삽입, 교체, 제거
- FieldSynchronizer: 토큰으로부터 파생 필드 계산
- MhdDateRule: 장바구니 규칙용 MHD 날짜 비교
"""
