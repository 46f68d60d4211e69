from sqlalchemy import Column, Integer, Sequence


def Id(sequence_name):
    return Column(
        Integer,
        Sequence(sequence_name),
        primary_key=True,
    )
