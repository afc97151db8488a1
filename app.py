# Servidor de desenvolvimento. Em produção: gunicorn financeiro.main:wsgi_app
import os

from financeiro.main import wsgi_app

if __name__ == '__main__':
    wsgi_app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=os.getenv("FLASK_DEBUG") == "1")
