# The registry of agent class
AGENT_REGISTRY = {}

# The registry of score store class
SCORE_STORE_REGISTRY = {}

def register_agent(kind: str):
    def deco(cls):
        AGENT_REGISTRY[kind] = cls
        return cls
    return deco

def register_score_store(kind: str):
    def deco(cls):
        SCORE_STORE_REGISTRY[kind] = cls
        return cls
    return deco
