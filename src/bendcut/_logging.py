import logging

consolelog = logging.getLogger("consolelog")
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("%(message)s"))  # Only show the actual message
consolelog.addHandler(handler)
consolelog.setLevel(level=logging.INFO)
consolelog.propagate = False

logging.getLogger("gurobipy").propagate = False
