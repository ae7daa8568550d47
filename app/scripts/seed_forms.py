"""
Seed script to create the request forms the sheets appender knows about
"""
import asyncio
from typing import List

from app.config.database import db_config
from app.database.db_operations import db_ops
from app.models.form import FieldType, FormDefinition, FormField, applicant_field
from app.services.form_store import FormStore

DEFAULT_FORMS = [
    FormDefinition(
        id="form_visitors",
        name="방문자 등록",
        description="방문 예정인 외부 손님을 등록합니다.",
        handler_ldap="",
        fields=[
            applicant_field(),
            FormField(id="field_visitor_requester_name", label="신청자 이름", type=FieldType.TEXT, placeholder="홍길동"),
            FormField(id="field_visitor_datetime", label="날짜 및 시간", type=FieldType.DATETIME),
            FormField(id="field_visitor_name", label="방문자 이름", type=FieldType.TEXT),
            FormField(id="field_visitor_company", label="방문자 소속", type=FieldType.TEXT),
            FormField(id="field_visitor_count", label="총 방문자 수", type=FieldType.TEXT, placeholder="예: 3"),
        ],
    ),
    FormDefinition(
        id="form_temp_badge",
        name="임시 사원증 신청",
        description="사원증을 두고 온 날 임시 출입증을 신청합니다.",
        handler_ldap="",
        fields=[
            applicant_field(),
            FormField(id="field_badge_requester_name", label="신청자 이름", type=FieldType.TEXT),
            FormField(id="field_badge_date", label="사원증이 필요한 날짜", type=FieldType.DATE),
        ],
    ),
]

async def seed_default_forms(store: FormStore) -> List[str]:
    """Insert the default forms that are not stored yet; returns the created ids"""
    await store.ensure_loaded()
    created = []
    for form in DEFAULT_FORMS:
        if store.get(form.id):
            print(f"⚠️  Form '{form.name}' already exists. Skipping...")
            continue
        await store.upsert(form)
        created.append(form.id)
        print(f"✅ Created form: {form.name}")
    return created

async def main():
    await db_config.connect_db()
    try:
        print("🌱 Seeding default request forms...")
        await seed_default_forms(FormStore(db_ops))
    finally:
        await db_config.close_db()

if __name__ == "__main__":
    asyncio.run(main())
