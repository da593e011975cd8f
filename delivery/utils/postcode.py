"""영국 우편번호 파싱/정규화 유틸리티"""

from __future__ import annotations

import re

# 주소 문자열 안에서 우편번호 추출용 (outward + 공백(선택) + inward)
UK_POSTCODE_SEARCH = re.compile(r"([A-Z]{1,2}[0-9][A-Z0-9]?\s?[0-9][A-Z]{2})", re.IGNORECASE)

# 공백 없이 입력된 우편번호 (예: SW1A1AA)
UK_POSTCODE_COMPACT = re.compile(r"^([A-Z]{1,2}[0-9][A-Z0-9]?)([0-9][A-Z]{2})$")

UK_POSTCODE_FULL = re.compile(r"^[A-Z]{1,2}[0-9][A-Z0-9]?\s?[0-9][A-Z]{2}$", re.IGNORECASE)


def normalize_postcode(postcode: str) -> str:
    """
    우편번호 정규화

    - 대문자 변환, 연속 공백 축약, 앞뒤 공백 제거
    - 공백 없는 완전한 우편번호는 inward code(마지막 3자) 앞에 공백 삽입

    예: " sw1a1aa " → "SW1A 1AA", "sw1a   1aa" → "SW1A 1AA", "sw1a" → "SW1A"
    """
    normalized = re.sub(r"\s+", " ", postcode or "").strip().upper()
    return UK_POSTCODE_COMPACT.sub(r"\1 \2", normalized)


def split_postcode(postcode: str) -> tuple[str, str]:
    """정규화된 우편번호를 (prefix, postfix)로 분리 (postfix가 없으면 빈 문자열)"""
    parts = normalize_postcode(postcode).split(" ")
    prefix = parts[0]
    postfix = parts[1] if len(parts) > 1 else ""
    return prefix, postfix


def extract_postcode(text: str) -> str | None:
    """자유 형식 주소 문자열에서 우편번호 추출 (없으면 None)"""
    match = UK_POSTCODE_SEARCH.search(text or "")
    if not match:
        return None
    return normalize_postcode(match.group(1))


def is_valid_postcode(postcode: str) -> bool:
    return bool(postcode) and bool(UK_POSTCODE_FULL.match(postcode.strip()))
