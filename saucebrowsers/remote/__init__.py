from .saucelabs import SauceLabs

NAME_TO_CLASS = {cls.name: cls for cls in (SauceLabs, )}

def get_service_cls(name):
    try:
        return NAME_TO_CLASS[name]
    except KeyError:
        raise ValueError("the service named '{0}' is unknown".format(name))
