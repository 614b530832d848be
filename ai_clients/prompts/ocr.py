"""Prompts for reading professional licence and staff ID cards."""

from __future__ import annotations

from ai_clients.models import PlatformType
from ai_clients.prompts.catalog import lookup_prompt

SYSTEM_CONTENT = """你是一個專門辨識台灣醫事人員證件的 OCR 助手。
你會收到一張圖片，可能是醫事人員證書、執業執照、專科醫師證書或醫院員工識別證。
規則：
1. 只輸出圖片上實際看得到的資訊，不要推測或補完。
2. 看不清楚或不存在的欄位請輸出空字串 ""。
3. 日期一律轉成 YYYY-MM-DD，民國年請換算成西元年（民國年 + 1911）。
4. 只輸出一個 JSON 物件，不要輸出 Markdown 或任何說明文字。"""

NAME_PROMPT = """請辨識圖片中證件持有人的中文姓名。
輸出格式：
{"name": "姓名"}"""

_PROFESSION_CONTEXT: dict[PlatformType, str] = {
    PlatformType.DOCTOR: "目前使用者為醫師，證件可能是醫師證書、醫師執業執照、專科醫師證書或醫院識別證。",
    PlatformType.NURSE: "目前使用者為護理人員，證件可能是護理師／護士證書、護理人員執業執照或醫院識別證。",
    PlatformType.PHARMACIST: "目前使用者為藥師，證件可能是藥師證書、藥師執業執照或藥局／醫院識別證。",
}

SYSTEM_PROMPTS: dict[PlatformType, str] = {
    platform: f"{SYSTEM_CONTENT}\n{context}" for platform, context in _PROFESSION_CONTEXT.items()
}

DOCTOR_INFO_PROMPT = """請從圖片中擷取醫師的身分資訊，輸出下列欄位：
{
  "name": "姓名",
  "birthday": "出生日期 YYYY-MM-DD",
  "position": "職稱，例如 主治醫師、住院醫師、VS、R",
  "department": "科別，例如 內科、外科、小兒科",
  "facility": "執業機構或醫院名稱",
  "valid_date": "執業執照有效期限 YYYY-MM-DD",
  "specialty_valid_date": "專科醫師證書有效期限 YYYY-MM-DD"
}"""

NURSE_INFO_PROMPT = """請從圖片中擷取護理人員的身分資訊，輸出下列欄位：
{
  "name": "姓名",
  "birthday": "出生日期 YYYY-MM-DD",
  "position": "職稱，例如 護理師、護士、專科護理師、護理長",
  "department": "單位，例如 內科病房、急診、加護病房",
  "facility": "執業機構或醫院名稱",
  "valid_date": "執業執照有效期限 YYYY-MM-DD"
}"""

PHARMACIST_INFO_PROMPT = """請從圖片中擷取藥師的身分資訊，輸出下列欄位：
{
  "name": "姓名",
  "birthday": "出生日期 YYYY-MM-DD",
  "position": "職稱，例如 藥師、藥劑生、藥局負責人",
  "department": "單位，例如 藥劑部、門診藥局",
  "facility": "執業機構、醫院或藥局名稱",
  "valid_date": "執業執照有效期限 YYYY-MM-DD"
}"""

INFO_PROMPTS: dict[PlatformType, str] = {
    PlatformType.DOCTOR: DOCTOR_INFO_PROMPT,
    PlatformType.NURSE: NURSE_INFO_PROMPT,
    PlatformType.PHARMACIST: PHARMACIST_INFO_PROMPT,
}


def get_system_prompt(platform: PlatformType | str) -> str:
    return lookup_prompt(SYSTEM_PROMPTS, platform, "system")


def get_info_prompt(platform: PlatformType | str) -> str:
    return lookup_prompt(INFO_PROMPTS, platform, "info extraction")
