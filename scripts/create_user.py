"""
Create (or reset the password of) an operator account.
Run: python -m scripts.create_user <email> <name> [--role admin]   (from the repository root)
The password is read from the prompt, never from the command line.
"""
import argparse
import asyncio
import getpass
import os
import sys

# Add parent so we can import from the backend root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from database import AsyncSessionLocal, init_db
from models import User
from services.auth import hash_password


async def create_user(email: str, name: str, password: str, role: str) -> None:
    await init_db()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.email == email))
        users = result.scalars().all()
        if len(users) > 1:
            print(f"{len(users)} users share {email}; fix the table before resetting passwords")
            return
        if users:
            user = users[0]
            user.password_hash = hash_password(password)
            print(f"Password reset for {email}")
        else:
            session.add(User(name=name, email=email, password_hash=hash_password(password), role=role))
            print(f"Created user {email}")
        await session.commit()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("name")
    parser.add_argument("--role", default="operador")
    args = parser.parse_args()
    password = getpass.getpass("Password: ")
    if not password:
        parser.error("password must not be empty")
    asyncio.run(create_user(args.email.strip(), args.name.strip(), password, args.role))


if __name__ == "__main__":
    main()
