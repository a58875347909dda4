"""
Benefit Catalog

Static lookup of which benefits each scheme provides and the detail text
shown when a respondent expands a benefit. Benefit names double as the
identifiers stored in Respondent.used_benefits, so they must not be
renamed once feedback has been collected.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.db_models import Scheme


@dataclass(frozen=True)
class BenefitDetail:
    description: str
    limit: str
    conditions: str


# =============================================================================
# SCHEME METADATA
# =============================================================================

SCHEME_TITLES = {
    Scheme.MANDATORY_EMPLOYEE: "มาตรา 33",
    Scheme.VOLUNTARY_CONTINUATION: "มาตรา 39",
    Scheme.SELF_EMPLOYED: "มาตรา 40",
    Scheme.SELF_EMPLOYED_OPTION_1: "มาตรา 40 ทางเลือกที่ 1",
    Scheme.SELF_EMPLOYED_OPTION_2: "มาตรา 40 ทางเลือกที่ 2",
    Scheme.SELF_EMPLOYED_OPTION_3: "มาตรา 40 ทางเลือกที่ 3",
    Scheme.NOT_REGISTERED: "ยังไม่ได้เป็นผู้ประกันตน",
}


# =============================================================================
# BENEFITS PER SCHEME
# =============================================================================

SICKNESS = "กรณีเจ็บป่วย"
MATERNITY = "กรณีคลอดบุตร"
INVALIDITY = "กรณีทุพพลภาพ"
DEATH = "กรณีเสียชีวิต"
OLD_AGE = "กรณีชราภาพ"
UNEMPLOYMENT = "กรณีว่างงาน"
CHILD_ALLOWANCE = "กรณีสงเคราะห์บุตร"

# Self-employed (section 40) benefit names
SE_SICKNESS = "เงินทดแทนกรณีประสบอันตรายหรือเจ็บป่วย"
SE_INVALIDITY = "เงินทดแทนกรณีทุพพลภาพ"
SE_FUNERAL = "เงินค่าทำศพ"
SE_LUMP_SUM = "เงินบำเหน็จชราภาพ"
SE_CHILD_ALLOWANCE = "เงินสงเคราะห์บุตร"

SCHEME_BENEFITS: Dict[Scheme, List[str]] = {
    Scheme.MANDATORY_EMPLOYEE: [
        SICKNESS, MATERNITY, INVALIDITY, DEATH, OLD_AGE, UNEMPLOYMENT, CHILD_ALLOWANCE,
    ],
    Scheme.VOLUNTARY_CONTINUATION: [
        SICKNESS, MATERNITY, INVALIDITY, DEATH, OLD_AGE, CHILD_ALLOWANCE,
    ],
    Scheme.SELF_EMPLOYED: [SE_SICKNESS, INVALIDITY, DEATH, SE_LUMP_SUM],
    Scheme.SELF_EMPLOYED_OPTION_1: [SE_SICKNESS, SE_INVALIDITY, SE_FUNERAL],
    Scheme.SELF_EMPLOYED_OPTION_2: [SE_SICKNESS, SE_INVALIDITY, SE_FUNERAL, SE_LUMP_SUM],
    Scheme.SELF_EMPLOYED_OPTION_3: [
        SE_SICKNESS, SE_INVALIDITY, SE_FUNERAL, SE_LUMP_SUM, SE_CHILD_ALLOWANCE,
    ],
    Scheme.NOT_REGISTERED: [],
}


# =============================================================================
# BENEFIT DETAILS
# =============================================================================

_MEDICAL_RATE_NOTE = "*ค่าบริการทางการแพทย์ จ่ายตามหลักเกณฑ์และอัตราที่คณะกรรมการการแพทย์กำหนด"

BENEFIT_DETAILS: Dict[str, BenefitDetail] = {
    SICKNESS: BenefitDetail(
        description="กรณีประสบอันตรายหรือเจ็บป่วย ครอบคลุมถึงเหตุที่ไม่เกิดจากการทำงาน",
        limit=(
            "• เข้ารักษาในสถานพยาบาลที่อยู่ในเครือข่ายของโรงพยาบาลตามสิทธิฯ โดยไม่ต้องเสียค่าใช้จ่าย\n"
            "• กรณีต้องหยุดงานพักรักษาตัวตามคำสั่งแพทย์ ได้รับเงินทดแทนการขาดรายได้ 50% ของค่าจ้าง "
            "ครั้งละไม่เกิน 90 วัน และไม่เกิน 180 วันต่อปี เว้นแต่ป่วยด้วยโรคเรื้อรังไม่เกิน 365 วันต่อปี\n"
            "• กรณีประสบอันตรายหรือเจ็บป่วยฉุกเฉินวิกฤต ผู้ประกันตนไม่ต้องสำรองจ่าย ภายใน 72 ชั่วโมง\n"
            "• ถอนฟัน อุดฟัน ขูดหินปูน และผ่าตัดฟันคุด ได้ไม่เกิน 900 บาทต่อปี"
        ),
        conditions=(
            "จ่ายเงินสมทบมาแล้วไม่น้อยกว่า 3 เดือน ภายในระยะเวลา 15 เดือน ก่อนวันรับบริการทางการแพทย์\n\n"
            + _MEDICAL_RATE_NOTE
        ),
    ),
    MATERNITY: BenefitDetail(
        description="เงินค่าคลอดบุตร ค่าตรวจและฝากครรภ์ และเงินสงเคราะห์การหยุดงานเพื่อการคลอดบุตร",
        limit=(
            "• ค่าคลอดบุตรเหมาจ่าย 15,000 บาทต่อครั้ง (ไม่จำกัดจำนวนครั้ง)\n"
            "• เงินสงเคราะห์การหยุดงานสำหรับผู้ประกันตนหญิง 50% ของค่าจ้าง เป็นเวลา 90 วัน ไม่เกิน 2 ครั้ง\n"
            "• กรณีสามีและภรรยาเป็นผู้ประกันตนทั้งคู่ให้ใช้สิทธิของฝ่ายใดฝ่ายหนึ่ง\n"
            "• ค่าตรวจและรับฝากครรภ์ เท่าที่จ่ายจริง จำนวน 5 ครั้ง ไม่เกิน 1,500 บาท"
        ),
        conditions=(
            "จ่ายเงินสมทบมาแล้วไม่น้อยกว่า 5 เดือน ภายในระยะเวลา 15 เดือน ก่อนเดือนที่คลอดบุตร\n\n"
            + _MEDICAL_RATE_NOTE
        ),
    ),
    INVALIDITY: BenefitDetail(
        description="เงินทดแทนการขาดรายได้ และค่ารักษาพยาบาลทางการแพทย์",
        limit=(
            "• ทุพพลภาพรุนแรง ได้รับเงินทดแทนการขาดรายได้ในอัตรา 50% ของค่าจ้างเป็นรายเดือน ตลอดชีวิต\n"
            "• ทุพพลภาพไม่รุนแรง ได้รับเงินทดแทนการขาดรายได้ ตามหลักเกณฑ์และระยะเวลาตามประกาศฯ กำหนด\n"
            "• ค่าบริการทางการแพทย์ โรงพยาบาลรัฐ จ่ายเท่าที่จ่ายจริงตามความจำเป็น\n"
            "• ค่าบริการทางการแพทย์ โรงพยาบาลเอกชน ผู้ป่วยนอกไม่เกิน 2,000 บาทต่อเดือน "
            "ผู้ป่วยในไม่เกิน 4,000 บาทต่อเดือน ค่ารถพยาบาลไม่เกิน 500 บาทต่อเดือน"
        ),
        conditions=(
            "จ่ายเงินสมทบมาแล้วไม่น้อยกว่า 3 เดือน ภายในระยะเวลา 15 เดือน ก่อนทุพพลภาพ\n\n"
            + _MEDICAL_RATE_NOTE
        ),
    ),
    DEATH: BenefitDetail(
        description="เงินช่วยเหลือค่าทำศพให้แก่ผู้จัดการศพ",
        limit=(
            "• 50,000 บาท โดยจ่ายให้แก่ผู้จัดการศพ\n"
            "• จ่ายเงินสมทบ 36 เดือน แต่ไม่ถึง 120 เดือน ได้รับเงินสงเคราะห์เท่ากับค่าจ้างเฉลี่ย 2 เดือน\n"
            "• จ่ายเงินสมทบ 120 เดือนขึ้นไป ได้รับเงินสงเคราะห์เท่ากับค่าจ้างเฉลี่ย 6 เดือน"
        ),
        conditions="จ่ายเงินสมทบมาแล้วไม่น้อยกว่า 1 เดือน ภายในระยะเวลา 6 เดือน ก่อนเสียชีวิต",
    ),
    OLD_AGE: BenefitDetail(
        description="เงินบำเหน็จ (จ่ายครั้งเดียว) หรือเงินบำนาญ (จ่ายรายเดือนตลอดชีวิต)",
        limit=(
            "• จ่ายเงินสมทบไม่ถึง 12 เดือน ได้รับเงินเท่ากับเงินสมทบกรณีชราภาพที่ผู้ประกันตนจ่าย\n"
            "• จ่ายเงินสมทบ 12 เดือน แต่ไม่ถึง 180 เดือน ได้รับเงินสมทบกรณีชราภาพที่ผู้ประกันตนและนายจ้างจ่าย\n"
            "• จ่ายเงินสมทบครบ 180 เดือน จะได้รับบำนาญชราภาพ 20% ของค่าจ้างเฉลี่ย 60 เดือนสุดท้าย\n"
            "• จ่ายเงินสมทบเกิน 180 เดือน จะได้รับเพิ่ม 1.5% ต่อระยะเวลาการจ่ายเงินสมทบครบทุก 12 เดือน"
        ),
        conditions="มีอายุครบ 55 ปีบริบูรณ์ และสิ้นสุดความเป็นผู้ประกันตน",
    ),
    UNEMPLOYMENT: BenefitDetail(
        description="เงินทดแทนการขาดรายได้กรณีถูกเลิกจ้าง ลาออกหรือสิ้นสุดสัญญาจ้าง และว่างงานจากเหตุสุดวิสัย",
        limit=(
            "• กรณีถูกเลิกจ้าง ได้เงิน 50% ของค่าจ้าง (ไม่เกินเดือนละ 15,000 บาท) ไม่เกิน 180 วัน/ปี\n"
            "• กรณีลาออกหรือสิ้นสุดสัญญาจ้างงาน ได้เงิน 30% ของค่าจ้าง ไม่เกิน 90 วัน/ปี\n"
            "• กรณีว่างงานจากเหตุภัยพิบัติ ได้เงิน 50% ของค่าจ้าง ไม่เกิน 180 วัน/ปี\n"
            "• กรณีว่างงานจากการระบาดของโรคติดต่อ ได้เงิน 50% ของค่าจ้าง ไม่เกิน 90 วัน/ปี"
        ),
        conditions=(
            "จ่ายเงินสมทบมาแล้วไม่น้อยกว่า 6 เดือน ภายในระยะเวลา 15 เดือนก่อนการว่างงาน "
            "และต้องขึ้นทะเบียนในเว็บไซต์ของกรมการจัดหางาน"
        ),
    ),
    CHILD_ALLOWANCE: BenefitDetail(
        description="เงินสงเคราะห์บุตรเหมาจ่ายรายเดือนสำหรับบุตรตามกฎหมาย",
        limit="เงิน 800 บาทต่อเดือนต่อบุตร 1 คน คราวละไม่เกิน 3 คน สำหรับบุตรแรกเกิดแต่ไม่เกิน 6 ปี",
        conditions="จ่ายเงินสมทบมาแล้วไม่น้อยกว่า 12 เดือน ภายในระยะเวลา 36 เดือน ก่อนเดือนที่มีสิทธิ",
    ),
    SE_SICKNESS: BenefitDetail(
        description="เงินทดแทนการขาดรายได้กรณีเจ็บป่วยที่ไม่ได้เกิดจากการทำงาน",
        limit=(
            "• นอนพักรักษาตัวในโรงพยาบาลตั้งแต่ 1 วันขึ้นไป วันละ 300 บาท\n"
            "• ไม่นอนพักรักษาตัวในโรงพยาบาล แต่มีใบรับรองแพทย์ให้หยุดพักรักษาตัวไม่เกิน 2 วัน "
            "ครั้งละ 50 บาท ไม่เกิน 3 ครั้งต่อปี\n"
            "• รับสิทธิรวมกันไม่เกิน 30 วันต่อปี"
        ),
        conditions=(
            "จ่ายเงินสมทบไม่น้อยกว่า 3 ใน 4 เดือน ก่อนเดือนที่ประสบอันตรายหรือเจ็บป่วย\n\n"
            "*หมายเหตุ: สิทธิการรักษาใช้สิทธิหลักประกันสุขภาพ/บัตรทอง (สปสช.) หรือสิทธิเดิมที่มีอยู่"
        ),
    ),
    SE_LUMP_SUM: BenefitDetail(
        description="เงินก้อนที่จ่ายให้ครั้งเดียวเมื่อมีอายุครบ 60 ปีและสิ้นสุดความเป็นผู้ประกันตน",
        limit=(
            "• ได้รับเงินบำเหน็จชราภาพ (เงินสมทบ 50 บาท คูณด้วยจำนวนเดือนที่จ่ายเงินสมทบ บวกกับเงินออมเพิ่ม) "
            "พร้อมผลประโยชน์ตอบแทนรายปีตามที่สำนักงานประกันสังคมกำหนด"
        ),
        conditions=(
            "• เมื่ออายุครบ 60 ปีบริบูรณ์ และสิ้นสุดความเป็นผู้ประกันตน\n"
            "• ผู้ประกันตนทางเลือกที่ 2 และ 3 สามารถจ่ายเงินสมทบเพิ่มเติม (ออมเพิ่ม) ได้ไม่เกิน 1,000 บาท ต่อเดือน"
        ),
    ),
    SE_INVALIDITY: BenefitDetail(
        description="เงินทดแทนการขาดรายได้กรณีทุพพลภาพ",
        limit=(
            "• ได้รับเงินทดแทนการขาดรายได้ต่อเดือนนาน 15 ปี\n"
            "• หากเสียชีวิตระหว่างรับเงินทดแทนฯ จะได้รับเงินค่าทำศพ 25,000 บาท"
        ),
        conditions=(
            "• จ่ายเงินสมทบมาแล้ว 6 เดือนใน 10 เดือน ก่อนเดือนทุพพลภาพ ได้รับ 500 บาท\n"
            "• จ่ายเงินสมทบมาแล้ว 12 เดือนใน 20 เดือน ก่อนเดือนทุพพลภาพ ได้รับ 650 บาท\n"
            "• จ่ายเงินสมทบมาแล้ว 24 เดือนใน 40 เดือน ก่อนเดือนทุพพลภาพ ได้รับ 800 บาท\n"
            "• จ่ายเงินสมทบมาแล้ว 36 เดือนใน 60 เดือน ก่อนเดือนทุพพลภาพ ได้รับ 1,000 บาท"
        ),
    ),
    SE_FUNERAL: BenefitDetail(
        description="เงินค่าทำศพและเงินสงเคราะห์กรณีตาย",
        limit=(
            "• ได้รับเงินค่าทำศพ 25,000 บาท จ่ายให้กับผู้จัดการศพ\n"
            "• ได้รับเงินสงเคราะห์กรณีตาย 8,000 บาท หากจ่ายเงินสมทบไม่น้อยกว่า 60 เดือน ก่อนเดือนที่ตาย"
        ),
        conditions=(
            "• จ่ายเงินสมทบไม่น้อยกว่า 6 ใน 12 เดือน ก่อนเดือนที่ตาย\n"
            "• กรณีตายเพราะอุบัติเหตุ หากจ่ายเงินสมทบ 1 ใน 6 เดือน ก่อนเดือนที่ตาย มีสิทธิได้รับเงินค่าทำศพ"
        ),
    ),
    SE_CHILD_ALLOWANCE: BenefitDetail(
        description="เงินสงเคราะห์บุตรรายเดือน (เฉพาะทางเลือกที่ 3)",
        limit=(
            "• ได้รับเงินสงเคราะห์บุตรรายเดือน คนละ 200 บาท คราวละไม่เกิน 2 คน\n"
            "• สำหรับบุตรอายุตั้งแต่แรกเกิดแต่ไม่เกิน 6 ปีบริบูรณ์"
        ),
        conditions=(
            "จ่ายเงินสมทบไม่น้อยกว่า 24 ใน 36 เดือน ก่อนเดือนที่มีสิทธิได้รับประโยชน์ทดแทน\n\n"
            "*ขณะรับเงินสงเคราะห์บุตร ต้องจ่ายเงินสมทบทุกเดือน"
        ),
    ),
}

# Option 3 pays higher rates for some self-employed benefits; only the limit text differs
OPTION_3_LIMITS: Dict[str, str] = {
    SE_SICKNESS: (
        "• นอนพักรักษาในโรงพยาบาลตั้งแต่ 1 วันขึ้นไป ได้รับวันละ 300 บาท\n"
        "• ไม่นอนพักรักษาตัวในโรงพยาบาล แต่มีใบรับรองแพทย์ให้หยุดพักรักษาตัวตั้งแต่ 3 วันขึ้นไป วันละ 200 บาท\n"
        "• รับสิทธิรวมกันไม่เกิน 90 วันต่อปี"
    ),
    SE_LUMP_SUM: (
        "• ได้รับเงินบำเหน็จชราภาพ (เงินสมทบ 150 บาท คูณด้วยจำนวนเดือนที่จ่ายเงินสมทบ บวกกับเงินออมเพิ่ม) "
        "พร้อมผลประโยชน์ตอบแทนรายปีตามที่สำนักงานประกันสังคมกำหนด"
    ),
    SE_INVALIDITY: (
        "• ได้รับเงินทดแทนการขาดรายได้ต่อเดือน ตลอดชีวิต\n"
        "• หากเสียชีวิตระหว่างรับเงินทดแทนฯ จะได้รับเงินค่าทำศพ 50,000 บาท"
    ),
    SE_FUNERAL: "• ได้รับเงินค่าทำศพ 50,000 บาท จ่ายให้กับผู้จัดการศพ",
}


# =============================================================================
# LOOKUPS
# =============================================================================

def benefits_for(scheme: Optional[Scheme]) -> List[str]:
    """Ordered benefit names for a scheme. Unknown or unset schemes have none."""
    if scheme is None:
        return []
    return list(SCHEME_BENEFITS.get(scheme, []))


def detail_for(benefit_name: str, scheme: Optional[Scheme] = None) -> Optional[BenefitDetail]:
    """
    Detail text for a benefit, or None when the catalog has no entry.

    A missing entry is not an error: the benefit is simply shown without
    an expandable detail panel.
    """
    detail = BENEFIT_DETAILS.get(benefit_name)
    if detail is None:
        return None
    if scheme == Scheme.SELF_EMPLOYED_OPTION_3 and benefit_name in OPTION_3_LIMITS:
        return BenefitDetail(
            description=detail.description,
            limit=OPTION_3_LIMITS[benefit_name],
            conditions=detail.conditions,
        )
    return detail


def scheme_title(scheme: Optional[Scheme]) -> str:
    if scheme is None:
        return ""
    return SCHEME_TITLES.get(scheme, "")
