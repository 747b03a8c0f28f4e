"""agency-cms 테이블을 생성합니다. --reset을 주면 기존 테이블(버전 이력 포함)을 지우고 다시 만듭니다."""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agency_cms.config import settings
from agency_cms.database import Base, engine
import agency_cms.models  # noqa: F401 - 콘텐츠/버전/미리보기 링크 테이블 등록


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create agency-cms tables.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop every table first. Content versions and preview links are lost.",
    )
    return parser.parse_args()


def init_db(reset: bool = False) -> list:
    if reset:
        print(f"[init_db] dropping tables on {engine.url.render_as_string(hide_password=True)}")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    tables = sorted(Base.metadata.tables)
    print(f"[init_db] ready: {', '.join(tables)}")
    return tables


if __name__ == "__main__":
    args = parse_args()
    if args.reset and not settings.DEBUG:
        sys.exit("[init_db] --reset requires DEBUG=true")
    init_db(reset=args.reset)
