"""Registros de animais para os testes."""


def animal(id, name, gender, species='bufalo', health_status='healthy', **pedigree):
    return {
        "id": id,
        "name": name,
        "tag": None,
        "species": species,
        "breed": 'Murrah',
        "gender": gender,
        "health_status": health_status,
        **pedigree,
    }
