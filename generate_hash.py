import getpass
import sys

from boutique.utils.security import generate_password_hash

if __name__ == "__main__":
    # Mot de passe en argument, sinon saisi sans écho
    secret = sys.argv[1] if len(sys.argv) > 1 else getpass.getpass("Mot de passe admin: ")
    hashed_secret = generate_password_hash(secret)
    print(f"ADMIN_PASSWORD_HASH={hashed_secret}")
