from contextlib import contextmanager
from pagecms.extensions import db


@contextmanager
def transactional():
    """
    Unit of work for a multi-row write.

    Everything flushed inside the block commits together; any exception
    rolls the whole graph back and propagates unchanged.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
