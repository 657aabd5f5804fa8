import getpass
import sys

from storefront.core.security import hash_password, verify_password


def main():
    password = sys.argv[1] if len(sys.argv) > 1 else getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty")
        sys.exit(1)

    hashed = hash_password(password)
    if not verify_password(password, hashed):
        print("Generated hash did not verify; check the bcrypt installation")
        sys.exit(1)
    print("Add this line to .env:")
    print(f"ADMIN_PASSWORD_HASH={hashed}")


if __name__ == "__main__":
    main()
