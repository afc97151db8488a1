# financeiro/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Configurações do Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Configurações do Flask
FLASK_SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# "concurrent": uma requisição por parcela, em paralelo
# "batch": todas as parcelas em uma única requisição
INSTALLMENT_INSERT_MODE = os.getenv("INSTALLMENT_INSERT_MODE", "concurrent")
