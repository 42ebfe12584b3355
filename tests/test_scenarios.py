from __future__ import annotations

import pytest

from simple_state_machine import (
    ErrorCollection,
    IllegalTransitionError,
    StateMachineMixin,
    ValidatingTransitionExecutor,
    ValidationFailure,
    event_handler,
)


class Article(StateMachineMixin):
    def __init__(self):
        self.state = "draft"
        self.actions = []

    @event_handler("publish")
    def publish(self):
        self.actions.append("publish")

    @event_handler("archive")
    def archive(self):
        self.actions.append("archive")


Article.event("publish", [("draft", "published")])
Article.event("archive", [("published", "archived"), ("draft", "archived")])


class Cart(StateMachineMixin):
    executor_class = ValidatingTransitionExecutor

    def __init__(self, attach_error=False, save_result=True):
        self.state = "pending"
        self.errors = ErrorCollection()
        self.attach_error = attach_error
        self.save_result = save_result
        self.state_at_save = None

    @event_handler("checkout")
    def checkout(self):
        if self.attach_error:
            self.errors.add("items", "cannot be empty")

    def is_invalid(self):
        return False

    def save(self):
        self.state_at_save = self.state
        return self.save_result

    def save_or_fail(self):
        self.state_at_save = self.state


Cart.event("checkout", [("pending", "confirmed")])


def test_archive_draft_then_publish_is_rejected():
    article = Article()

    article.archive()
    assert article.state == "archived"
    assert article.actions == ["archive"]

    with pytest.raises(IllegalTransitionError):
        article.publish()
    assert article.state == "archived"
    assert article.actions == ["archive"]


def test_checkout_with_validation_error_in_both_forms():
    cart = Cart(attach_error=True)

    with pytest.raises(ValidationFailure) as exc_info:
        cart.fire("checkout!")
    assert exc_info.value.subject is cart
    assert cart.state == "pending"

    assert cart.checkout() is False
    assert cart.state == "pending"
    assert cart.errors.on("items")


def test_checkout_returns_save_result_with_state_already_advanced():
    cart = Cart(save_result=False)

    assert cart.checkout() is False
    assert cart.state == "confirmed"
    assert cart.state_at_save == "confirmed"
