# module eventpay.app
from eventpay.app_setup.factory import create_app

# App globale
app = create_app()
