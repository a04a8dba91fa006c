"""
Translation strings for the explorer, English and Chinese.

Labels with placeholders use str.format fields, e.g.
    text("attempt_title", "en", id=3) -> "Attempt #3"
"""

from enum import Enum

from shor_backend.shor_runner.attempt import ErrorKind


class ExplanationTopic(str, Enum):
    SHOR_INTRO = "shor_intro"
    COPRIME_SELECTION = "coprime_selection"
    QUANTUM_PERIOD_FINDING = "quantum_period_finding"
    QUANTUM_CIRCUIT = "quantum_circuit"
    CONTINUED_FRACTIONS = "continued_fractions"
    PERIOD_VERIFICATION = "period_verification"
    FINAL_FACTOR_CALCULATION = "final_factor_calculation"


EN = {
    # Header
    "title": "Shor's Algorithm Explorer",
    "subtitle": "An interactive simulation of quantum factorization.",
    # Input form
    "form_label": "Factorize N =",
    "form_placeholder": "e.g., 91",
    "button_running": "Running...",
    "button_start": "Start Factorization",
    "form_hint": "Try composite odd numbers like 15, 35, 91, 143, or 323.",
    # Status
    "error_label": "Error",
    "running_factorization": "Running factorization for N = {n}...",
    "simulating_quantum": "Simulating quantum process...",
    "factorization_complete": "Factorization Complete!",
    "factorization_failed": "Factorization Failed",
    "factorization_failed_message": (
        "The algorithm could not find factors for N = {n} after several attempts. "
        "This can happen if the number is prime or due to the probabilistic nature "
        "of the algorithm."
    ),
    # Validation
    "error_number_range": "Please enter an integer between {min_n:,} and {max_n:,}.",
    "error_number_even": "Please enter an odd number. A factor is 2.",
    "error_number_too_small": "Please enter a number greater than 1.",
    # Attempt card
    "attempt_title": "Attempt #{id}",
    "status_running": "Running",
    "status_failed": "Failed",
    "status_success": "Success",
    "yes": "Yes",
    "no": "No",
    "step1_title": "Pick a base 'a' and check GCD",
    "step1_chosen_base": "Chosen base",
    "step1_checking_gcd": "Checking",
    "step2_title": "Quantum Period Finding",
    "step2_description": "Simulate the quantum circuit to find the period 'r' of f(x) = {a}^x mod {n}.",
    "step2_measurement": "Simulated measurement: c = {c} on a register of size q = 2^{t} = {q}.",
    "step3_title": "Continued Fraction Expansion",
    "step3_description": "Expand the fraction c/q to find a candidate for the period 'r'.",
    "step4_title": "Verify Period",
    "step4_description": "Verifying candidate period r = {r}",
    "step4_is_odd": "Is 'r' odd?",
    "step4_is_trivial": "Is a^(r/2) ≡ -1 (mod N) (trivial result)?",
    "step5_title": "Calculate Factors",
    "step5_description": "Since the period 'r' is valid, we can calculate the factors using the base a = {a}:",
    "step5_term": "Term",
    "step5_factor1": "Factor 1",
    "step5_factor2": "Factor 2",
    "step5_success": "Success & Verification",
    "step5_found_factors": "Found factors {f1} and {f2}",
    "step5_check": "Check:",
    "attempt_failed": "Attempt Failed",
    # Circuit diagram
    "circuit_diagram_title": "Simplified Circuit Diagram",
    "circuit_qubits": "{count} qubits",
    "circuit_measure": "Measure",
    # Continued fraction table
    "table_header_convergent": "Convergent",
    "table_header_denominator": "Denominator",
    "table_hint_candidate": "This denominator is the best candidate for the period 'r'",
    "table_best_candidate": "Best candidate for period",
    # Common
    "explain_button_label": "Get explanation",
    "modal_close": "Close",
}

ZH = {
    "title": "SHOR算法演示器",
    "subtitle": "一个交互式的量子因式分解模拟器。",
    "form_label": "分解 N =",
    "form_placeholder": "例如 91",
    "button_running": "运行中...",
    "button_start": "开始分解",
    "form_hint": "请尝试不超过100000的奇数合数，如 15, 35, 91, 143, 或 323。",
    "error_label": "错误",
    "running_factorization": "正在为 N = {n} 运行因式分解...",
    "simulating_quantum": "正在模拟量子过程...",
    "factorization_complete": "分解完成！",
    "factorization_failed": "分解失败",
    "factorization_failed_message": (
        "多次尝试后，算法未能找到 N = {n} 的因子。如果该数字是素数或由于算法的概率性，可能会发生这种情况。"
    ),
    "error_number_range": "请输入一个 {min_n:,} 到 {max_n:,} 之间的整数。",
    "error_number_even": "请输入一个奇数。因子之一是 2。",
    "error_number_too_small": "请输入一个大于 1 的数字。",
    "attempt_title": "尝试 #{id}",
    "status_running": "运行中",
    "status_failed": "失败",
    "status_success": "成功",
    "yes": "是",
    "no": "否",
    "step1_title": "选择基数 'a' 并检查 GCD",
    "step1_chosen_base": "选择的基数",
    "step1_checking_gcd": "检查",
    "step2_title": "量子周期查找",
    "step2_description": "模拟量子电路以找到函数 f(x) = {a}^x mod {n} 的周期 'r'。",
    "step2_measurement": "模拟测量结果：c = {c}，寄存器大小为 q = 2^{t} = {q}。",
    "step3_title": "连分数展开",
    "step3_description": "展开分数 c/q 以找到周期 'r' 的候选值。",
    "step4_title": "验证周期",
    "step4_description": "验证候选周期 r = {r}",
    "step4_is_odd": "'r' 是奇数吗？",
    "step4_is_trivial": "a^(r/2) ≡ -1 (mod N) 是否成立 (平凡解)？",
    "step5_title": "计算因子",
    "step5_description": "由于周期 'r' 有效，我们可以使用基数 a = {a} 来计算因子：",
    "step5_term": "中间项",
    "step5_factor1": "因子 1",
    "step5_factor2": "因子 2",
    "step5_success": "成功与验证",
    "step5_found_factors": "找到因子 {f1} 和 {f2}",
    "step5_check": "验证:",
    "attempt_failed": "尝试失败",
    "circuit_diagram_title": "简化电路图",
    "circuit_qubits": "{count} 量子比特",
    "circuit_measure": "测量",
    "table_header_convergent": "收敛项",
    "table_header_denominator": "分母",
    "table_hint_candidate": "此分母是周期 'r' 的最佳候选值",
    "table_best_candidate": "最佳周期候选值",
    "explain_button_label": "获取解释",
    "modal_close": "关闭",
}

TRANSLATIONS = {"en": EN, "zh": ZH}

ERROR_MESSAGES = {
    "en": {
        ErrorKind.NO_PERIOD_CANDIDATE: "Continued fraction expansion did not yield a suitable period candidate.",
        ErrorKind.ODD_PERIOD: "The period 'r' is odd. A new base 'a' must be chosen.",
        ErrorKind.TRIVIAL_VERIFICATION: "a^(r/2) ≡ -1 (mod N). This gives a trivial factor. A new base 'a' must be chosen.",
        ErrorKind.TRIVIAL_FACTORS: "Calculated factors were trivial (1 or N).",
    },
    "zh": {
        ErrorKind.NO_PERIOD_CANDIDATE: "连分数展开未能产生合适的周期候选值。",
        ErrorKind.ODD_PERIOD: "周期 'r' 是奇数。必须选择一个新的基数 'a'。",
        ErrorKind.TRIVIAL_VERIFICATION: "a^(r/2) ≡ -1 (mod N)。这导致了平凡解。必须选择一个新的基数 'a'。",
        ErrorKind.TRIVIAL_FACTORS: "计算出的因子是平凡的 (1 或 N)。",
    },
}

EXPLANATION_TITLES = {
    "en": {
        ExplanationTopic.SHOR_INTRO: "Shor's Algorithm Introduction",
        ExplanationTopic.COPRIME_SELECTION: "Co-prime Base Selection",
        ExplanationTopic.QUANTUM_PERIOD_FINDING: "Quantum Period Finding",
        ExplanationTopic.QUANTUM_CIRCUIT: "The Quantum Circuit",
        ExplanationTopic.CONTINUED_FRACTIONS: "Continued Fractions",
        ExplanationTopic.PERIOD_VERIFICATION: "Period Verification",
        ExplanationTopic.FINAL_FACTOR_CALCULATION: "Final Factor Calculation",
    },
    "zh": {
        ExplanationTopic.SHOR_INTRO: "Shor算法简介",
        ExplanationTopic.COPRIME_SELECTION: "互质基数选择",
        ExplanationTopic.QUANTUM_PERIOD_FINDING: "量子周期查找",
        ExplanationTopic.QUANTUM_CIRCUIT: "量子电路",
        ExplanationTopic.CONTINUED_FRACTIONS: "连分数",
        ExplanationTopic.PERIOD_VERIFICATION: "周期验证",
        ExplanationTopic.FINAL_FACTOR_CALCULATION: "最终因子计算",
    },
}

EXPLANATION_CONTENT = {
    "en": {
        ExplanationTopic.SHOR_INTRO: (
            "Shor's algorithm is a quantum algorithm for integer factorization. Developed by Peter Shor "
            "in 1994, it can factor large numbers exponentially faster than the best-known classical "
            "algorithms. This threatens modern cryptography, which relies on the difficulty of factoring.\n\n"
            "The algorithm combines classical steps with a quantum core:\n"
            "1. Choose a random number 'a'.\n"
            "2. Use a quantum computer to find the period 'r' of the function $f(x) = a^x \\pmod{N}$.\n"
            "3. Use the period 'r' in a classical calculation to find the factors of N."
        ),
        ExplanationTopic.COPRIME_SELECTION: (
            "The first classical step is to pick a random integer 'a' such that $1 < a < N$ and compute "
            "$gcd(a, N)$.\n\n"
            "If $gcd(a, N) > 1$, we have found a non-trivial factor of N and the algorithm terminates. "
            "If $gcd(a, N) = 1$, 'a' and 'N' are co-prime and we proceed to the quantum part. The later "
            "steps need 'a' co-prime with N to form a valid periodic function."
        ),
        ExplanationTopic.QUANTUM_PERIOD_FINDING: (
            "This is the heart of Shor's algorithm. We need the period 'r' of $$f(x) = a^x \\pmod{N}$$ "
            "the smallest positive integer such that $a^r \\equiv 1 \\pmod{N}$.\n\n"
            "Finding 'r' is extremely hard for classical computers, but a quantum computer can do it "
            "efficiently with the Quantum Fourier Transform (QFT). The circuit prepares a superposition, "
            "computes $f(x)$ for every input at once and applies the QFT so that the period is likely to "
            "be revealed upon measurement."
        ),
        ExplanationTopic.QUANTUM_CIRCUIT: (
            "The simplified circuit has two registers. The first (t qubits) is put into a superposition "
            "of all inputs with Hadamard (H) gates. The second (n qubits) stores the function output.\n\n"
            "A controlled-Uf gate computes $f(x) = a^x \\pmod{N}$, entangling the registers. An inverse "
            "Quantum Fourier Transform (QFT⁻¹) on the first register concentrates amplitude on states "
            "related to the period 'r'. Measuring the first register gives a value from which 'r' can "
            "be deduced."
        ),
        ExplanationTopic.CONTINUED_FRACTIONS: (
            "The measurement does not give 'r' directly. It gives an integer 'c' close to a random "
            "multiple of $q/r$, where $q = 2^t$ is the size of the first register. So $$\\frac{c}{q} "
            "\\approx \\frac{s}{r}$$ for some unknown integer 's'.\n\n"
            "Continued fractions find the best rational approximations of a value. Applied to $c/q$ they "
            "recover $s/r$, and its denominator is our candidate for the period 'r'."
        ),
        ExplanationTopic.PERIOD_VERIFICATION: (
            "With a candidate period 'r' we perform two classical checks.\n\n"
            "First, if 'r' is odd the method fails for this 'a' and we restart with a new one.\n\n"
            "Second, for even 'r' we compute $a^{r/2} \\pmod{N}$. If it is congruent to $-1 \\pmod{N}$ "
            "(that is, $N-1$) it only leads to the trivial factors 1 and N, so we restart as well. "
            "Otherwise the period is valid and we move to the final step."
        ),
        ExplanationTopic.FINAL_FACTOR_CALCULATION: (
            "With a valid period we know $a^r \\equiv 1 \\pmod{N}$, which can be rewritten as "
            "$(a^{r/2} - 1)(a^{r/2} + 1) \\equiv 0 \\pmod{N}$.\n\n"
            "So N shares a factor with $(a^{r/2} - 1)$ or $(a^{r/2} + 1)$, found with the GCD:\n\n"
            "$$p = gcd(a^{r/2} - 1, N)$$\n$$q = gcd(a^{r/2} + 1, N)$$\n\n"
            "These values are the non-trivial factors of N."
        ),
    },
    "zh": {
        ExplanationTopic.SHOR_INTRO: (
            "Shor算法是一种用于整数因式分解的量子算法。它由彼得·秀尔于1994年提出，能以指数级速度比最知名的经典算法更快地分解大数，"
            "这对依赖因式分解难度的现代密码学构成了威胁。\n\n"
            "该算法将经典步骤与量子核心相结合：\n"
            "1. 选择一个随机数 'a'。\n"
            "2. 使用量子计算机找到函数 $f(x) = a^x \\pmod{N}$ 的周期 'r'。\n"
            "3. 使用周期 'r' 进行经典计算，找出 N 的因子。"
        ),
        ExplanationTopic.COPRIME_SELECTION: (
            "第一个经典步骤是选择一个随机整数 'a'，使得 $1 < a < N$，然后计算 $gcd(a, N)$。\n\n"
            "如果 $gcd(a, N) > 1$，我们就找到了 N 的一个非平凡因子，算法终止。如果 $gcd(a, N) = 1$，"
            "'a' 和 'N' 互质，我们继续进行量子部分。后续步骤需要 'a' 与 N 互质才能形成有效的周期函数。"
        ),
        ExplanationTopic.QUANTUM_PERIOD_FINDING: (
            "这是Shor算法的核心。我们需要找到函数 $$f(x) = a^x \\pmod{N}$$ 的周期 'r'，即满足 "
            "$a^r \\equiv 1 \\pmod{N}$ 的最小正整数。\n\n"
            "对于经典计算机来说，找到 'r' 极其困难，但量子计算机可以使用量子傅里叶变换 (QFT) 高效地完成。"
            "量子电路准备叠加态，同时计算所有输入的 $f(x)$，再用 QFT 变换，使周期在测量时很可能被揭示出来。"
        ),
        ExplanationTopic.QUANTUM_CIRCUIT: (
            "简化的电路由两个寄存器组成。第一个寄存器 (t 个量子比特) 使用哈达玛 (H) 门初始化为所有输入的叠加态。"
            "第二个寄存器 (n 个量子比特) 用于存储函数的输出。\n\n"
            "受控 Uf 门计算 $f(x) = a^x \\pmod{N}$，使两个寄存器纠缠。对第一个寄存器应用逆量子傅里叶变换 (QFT⁻¹)，"
            "将概率幅集中在与周期 'r' 相关的状态上。测量第一个寄存器会得到一个可以推断出 'r' 的值。"
        ),
        ExplanationTopic.CONTINUED_FRACTIONS: (
            "量子测量并不能直接给出周期 'r'，而是给出一个整数 'c'，它接近 $q/r$ 的某个随机倍数，其中 $q = 2^t$ "
            "是第一个寄存器的大小。因此 $$\\frac{c}{q} \\approx \\frac{s}{r}$$ 对某个未知整数 's' 成立。\n\n"
            "连分数算法用于寻找给定值的最佳有理数近似。将其应用于 $c/q$ 可以恢复 $s/r$，其分母就是周期 'r' 的候选值。"
        ),
        ExplanationTopic.PERIOD_VERIFICATION: (
            "得到候选周期 'r' 后，需要执行两次经典检查。\n\n"
            "首先，如果 'r' 是奇数，该方法对当前的 'a' 失败，需要选择新的 'a' 重新开始。\n\n"
            "其次，如果 'r' 是偶数，计算 $a^{r/2} \\pmod{N}$。如果结果与 $-1 \\pmod{N}$ (即 $N-1$) 同余，"
            "只会得到平凡因子 1 和 N，同样需要重新开始。否则周期有效，可以进入最后一步。"
        ),
        ExplanationTopic.FINAL_FACTOR_CALCULATION: (
            "找到有效周期后，我们知道 $a^r \\equiv 1 \\pmod{N}$，可以改写为 "
            "$(a^{r/2} - 1)(a^{r/2} + 1) \\equiv 0 \\pmod{N}$。\n\n"
            "因此 N 必须与 $(a^{r/2} - 1)$ 或 $(a^{r/2} + 1)$ 共享一个因子，可以通过最大公约数求得：\n\n"
            "$$p = gcd(a^{r/2} - 1, N)$$\n$$q = gcd(a^{r/2} + 1, N)$$\n\n"
            "这些值就是 N 的非平凡因子。"
        ),
    },
}


def translate(lang):
    """Label table for a language; KeyError for unsupported languages."""
    return TRANSLATIONS[lang]


def text(key, lang, **fields):
    template = translate(lang)[key]
    return template.format(**fields) if fields else template


def error_message(kind, lang):
    return ERROR_MESSAGES[lang][ErrorKind(kind)]


def status_label(status, lang):
    return translate(lang)["status_" + getattr(status, "value", status)]


def explanation(topic, lang):
    """Title and body for an explanation topic."""
    topic = ExplanationTopic(topic)
    return {
        "topic": topic.value,
        "title": EXPLANATION_TITLES[lang][topic],
        "content": EXPLANATION_CONTENT[lang][topic],
    }
