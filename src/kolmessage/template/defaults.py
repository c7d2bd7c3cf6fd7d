"""Built-in outreach message template."""

DEFAULT_TEMPLATE_ID = "default-1"
DEFAULT_TEMPLATE_NAME = "預設範本"

DEFAULT_MESSAGE_TEMPLATE = """HI {contactPerson}，如剛剛討論，提供方案給 {kolName} 參考唷

<<< 合作模式與分潤 >>>
🔹採 {profitShare} 分潤機制[if: guaranteedMinimum|，並提供 {guaranteedMinimum} 保底]
🔹透過 {kolName} 的專屬頁面成交，提供銷售額的 {profitShare} 作為回饋(扣除物流成本)
[if: bonusAmount|🔹除分潤方案，將額外提供 {bonusAmount} 作為加碼獎勵]
[if: performanceThreshold|🔹如果業績達到 {performanceThreshold}，則分潤提升至 {profitShareBonus}]
[if: fanOffer|<<<粉絲福利>>>
{fanOffer}]

<<< 成效追蹤 >>>
🔹會為 {kolName} 建立專屬頁面與連結
🔹提供報表連結，方便追蹤轉單並調整內容節奏

<<< 時程安排 >>>
🔹初期合作至 {endDate}，後續可思考長期合作
[if: sendHandle=是|🔹會再補 7DS-ZAPA 手把，日後也可以評估薩爾達無雙的合作案喔]
[if: sendHandle=否|🔹如果有需要素材，我們都可以提供免費的素材包]

再麻煩 {kolName} 評估看看🙏期待可以合作一波~~"""
