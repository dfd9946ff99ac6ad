from __future__ import annotations
from PySide6.QtCore    import Qt, QTimer, Signal, Slot # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QPushButton, QLabel, QWidget
)

from plotTwist.storage.auth import AuthService, AuthError, ACCOUNT_CREATED, SIGNED_IN


class AuthDialog(QDialog):
    """Sign in / sign up form over `AuthService`."""
    signed_in = Signal(object)       # User

    def __init__(self, auth: AuthService, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._auth = auth
        self._sign_in_mode = True
        self.setModal(True)
        self.setFixedWidth(380)

        box = QVBoxLayout(self)
        self.heading = QLabel(alignment=Qt.AlignCenter)
        self.heading.setStyleSheet("font-size:24px; font-weight:900;")
        self.sub = QLabel(alignment=Qt.AlignCenter)
        box.addWidget(self.heading)
        box.addWidget(self.sub)

        form = QFormLayout()
        self.username = QLineEdit(placeholderText="Enter username")
        self.email    = QLineEdit(placeholderText="Enter email")
        self.password = QLineEdit(placeholderText="Enter password")
        self.password.setEchoMode(QLineEdit.Password)
        self._username_label = QLabel("Username")
        form.addRow(self._username_label, self.username)
        form.addRow("Email", self.email)
        form.addRow("Password", self.password)
        box.addLayout(form)

        self.message = QLabel(wordWrap=True)
        self.message.hide()
        box.addWidget(self.message)

        self.submit = QPushButton()
        self.submit.setDefault(True)
        self.submit.clicked.connect(self._on_submit)
        box.addWidget(self.submit)

        self.switch = QPushButton()
        self.switch.setFlat(True)
        self.switch.clicked.connect(lambda: self._set_mode(not self._sign_in_mode))
        box.addWidget(self.switch)

        self._set_mode(True)

    # ------------------------------------------------------------------
    def _set_mode(self, sign_in: bool, keep_message: bool = False) -> None:
        self._sign_in_mode = sign_in
        self.setWindowTitle("Sign In" if sign_in else "Sign Up")
        self.heading.setText("Sign In" if sign_in else "Sign Up")
        self.sub.setText("Welcome back to PlotTwist" if sign_in else "Create your account")
        self.submit.setText("Sign In" if sign_in else "Sign Up")
        self.switch.setText("Don't have an account? Sign up here" if sign_in
                            else "Already have an account? Sign in here")
        self.username.setVisible(not sign_in)
        self._username_label.setVisible(not sign_in)
        for field in (self.username, self.email, self.password):
            field.clear()
        if not keep_message:
            self.message.hide()

    def _flash(self, text: str, ok: bool) -> None:
        colour = "#4ade80" if ok else "#f87171"
        self.message.setStyleSheet(f"color:{colour};")
        self.message.setText(text)
        self.message.show()

    @Slot()
    def _on_submit(self) -> None:
        try:
            if self._sign_in_mode:
                user = self._auth.sign_in(self.email.text(), self.password.text())
            else:
                self._auth.sign_up(self.email.text(), self.password.text(), self.username.text())
        except AuthError as e:
            self._flash(str(e), ok=False)
            return

        if self._sign_in_mode:
            self._flash(SIGNED_IN, ok=True)
            self.signed_in.emit(user)
            QTimer.singleShot(1000, self.accept)
        else:
            self._set_mode(True, keep_message=True)
            self._flash(ACCOUNT_CREATED, ok=True)
