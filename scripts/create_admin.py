"""
Cria (ou reaproveita) o primeiro usuário ADMIN, necessário para cadastrar os demais.

Uso:
    python scripts/create_admin.py --nome "Admin" --email admin@empresa.com.br --senha "troque-esta-senha"
"""
import sys
import os
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load environment variables before the settings object is built
from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import select

from hrms.db import Base, SessionLocal, engine
from hrms.errors import ConflictError
from hrms.models.models import User, UserFunction
from hrms.schemas.auth import UserCreate
from hrms.services.users import create_user


def create_admin(nome: str, email: str, senha: str) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        payload = UserCreate(nome=nome, email=email, senha=senha, funcao=UserFunction.ADMIN)
        try:
            user = create_user(db, payload)
        except ConflictError:
            existing = db.scalars(select(User).where(User.email == payload.email.lower())).first()
            print(f"Usuário já existe: {existing.email} ({existing.funcao.value})")
            return 1
        print(f"ADMIN criado: {user.email} id={user.id}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the first ADMIN user")
    parser.add_argument("--nome", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--senha", required=True)
    args = parser.parse_args()

    sys.exit(create_admin(args.nome, args.email, args.senha))
