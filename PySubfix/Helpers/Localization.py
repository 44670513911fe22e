import gettext
import os

_domain = 'pysubfix'
_locale_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'locales')

_translation = gettext.translation(_domain, localedir=_locale_dir, fallback=True)

def _(message : str) -> str:
    """ Translate a user-facing message, returning it unchanged if no catalogue is installed """
    return _translation.gettext(message)
