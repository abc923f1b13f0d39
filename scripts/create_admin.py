"""
관리자 계정 생성/갱신 스크립트
같은 이메일이 있으면 비밀번호와 역할을 갱신합니다.
사용법: python scripts/create_admin.py admin@example.com 'password' --role superAdmin
"""
import argparse
import getpass
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app
from models import USER_ROLES, User, db
from services.auth_service import hash_password


def main():
    parser = argparse.ArgumentParser(description="Create or update an admin account")
    parser.add_argument("email")
    parser.add_argument("password", nargs="?", help="생략하면 프롬프트로 입력")
    parser.add_argument("--role", choices=USER_ROLES, default="superAdmin")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        print("비밀번호는 8자 이상이어야 합니다.")
        return 1

    email = args.email.strip().lower()
    with app.app_context():
        db.create_all()
        user = User.query.filter_by(email=email).first()
        if user:
            user.password_hash = hash_password(password)
            user.role = args.role
            user.is_active = True
            action = "갱신"
        else:
            db.session.add(User(email=email, password_hash=hash_password(password), role=args.role))
            action = "생성"
        db.session.commit()

    print(f"{email} ({args.role}) 계정 {action} 완료")
    return 0


if __name__ == "__main__":
    sys.exit(main())
